"""Denormalized search columns for read models."""


def search_text(*parts) -> str:
    """Lowercased, space-joined text of the non-empty parts."""
    return " ".join(str(part).strip().lower() for part in parts if part)
