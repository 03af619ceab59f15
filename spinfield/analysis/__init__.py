"""Analysis of spin configurations."""

from .energy import energy_terms, total_energy

__all__ = ["energy_terms", "total_energy"]
