from app.db.base import Document


def record_from_doc(doc: Document) -> dict:
    """Map a storage document (``_id``) onto record fields (``id``)."""
    record = dict(doc)
    record["id"] = record.pop("_id")
    return record
