"""Exceptions raised by the field engine."""


class FieldError(ValueError):
    """Base class for all field-engine errors."""


class InvalidLatticeShape(FieldError):
    """Spin, buffer or provider array does not match the declared lattice."""


class SiteOutOfBounds(FieldError, IndexError):
    """Requested site lies outside the lattice."""


class DefectGeometryUnsupported(FieldError):
    """Defect centre or bond-weight geometry incompatible with the lattice."""


class InvalidParameter(FieldError):
    """Parameter value that would produce NaN/Inf or an inconsistent setup."""
