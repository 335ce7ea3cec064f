"""
Validated package and extra names.

Both are ``str`` subclasses holding the PEP 503 normalized form, so they
compare, hash and print like plain strings once constructed. Construction
is the validation step: an invalid name never becomes an instance.
"""

from __future__ import annotations

from packaging.utils import InvalidName, canonicalize_name

from depspec.exceptions import InvalidNameError


class _NormalizedName(str):
    """Base for names validated and normalized on construction."""

    kind = "name"

    def __new__(cls, value: str) -> "_NormalizedName":
        if isinstance(value, cls):
            return value
        try:
            normalized = canonicalize_name(value, validate=True)
        except InvalidName as exc:
            raise InvalidNameError(
                f"Invalid {cls.kind} name: {value!r}",
                name=value,
                kind=cls.kind,
            ) from exc
        return super().__new__(cls, normalized)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({str(self)!r})"


class PackageName(_NormalizedName):
    """A normalized distribution name, e.g. ``PackageName("Flask_Login")``."""

    kind = "package"


class ExtraName(_NormalizedName):
    """A normalized optional-dependency group name."""

    kind = "extra"
