"""Staff-side records for a residential estate, kept in SQLite."""

__version__ = "0.1.0"

__all__ = [
    "cli",
    "leaves",
    "parking",
    "payments",
    "repairs",
    "reports",
    "roster",
    "scheduling",
    "training",
    "visitors",
]