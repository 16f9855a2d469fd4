"""Storage operations for writing index records."""

from ravendb import DocumentStore

from pdfchat.service.database.models import DocumentChunk


def upsert_chunks(store: DocumentStore, collection: str, records: list[DocumentChunk]) -> int:
    """Store index records in one session, overwriting records with the same id.

    Args:
        store: Initialized DocumentStore instance
        collection: Collection name to store records in
        records: DocumentChunk entities with Id and embedding set

    Returns:
        int: Number of records written
    """
    if not records:
        return 0

    with store.open_session() as session:
        for record in records:
            record.collection = collection
            session.store(record, record.Id)

            metadata = session.advanced.get_metadata_for(record)
            metadata["@collection"] = collection

        session.save_changes()

    return len(records)
