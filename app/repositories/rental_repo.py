from datetime import date
from typing import List, Optional

from app.db.base import Collection
from app.models.rental import Rental, RentalCreate
from app.models.base import utcnow
from app.repositories.base import record_from_doc


class RentalRepository:
    """Rental storage operations. Open rentals have no returned_date."""

    def __init__(self, collection: Collection):
        self.collection = collection

    async def create_rental(self, rental_data: RentalCreate) -> Rental:
        """Create a new open rental."""
        rental_dict = {
            "_id": await self.collection.next_id(),
            "user_id": rental_data.user_id,
            "movie_id": rental_data.movie_id,
            "rented_date": rental_data.rented_date,
            "due_date": rental_data.due_date,
            "returned_date": None,
            "notes": rental_data.notes,
            "created_at": utcnow()
        }

        await self.collection.insert(rental_dict)
        return Rental(**record_from_doc(rental_dict))

    async def list_rentals(self, **filters) -> List[Rental]:
        """List rentals in id order, filtered by field equality."""
        docs = await self.collection.list(filters or None)
        return [Rental(**record_from_doc(doc)) for doc in docs]

    async def get_rental(self, rental_id: int) -> Optional[Rental]:
        """Get a rental by id."""
        doc = await self.collection.get(rental_id)
        if doc:
            return Rental(**record_from_doc(doc))
        return None

    async def mark_returned(self, rental_id: int, returned_date: date) -> Optional[Rental]:
        """Set the returned date."""
        doc = await self.collection.update(rental_id, {"returned_date": returned_date})
        if doc:
            return Rental(**record_from_doc(doc))
        return None

    async def delete_rental(self, rental_id: int) -> bool:
        """Delete a rental."""
        return await self.collection.delete(rental_id)

    async def count_open(self, **filters) -> int:
        """Count open rentals, optionally for one user or movie."""
        return await self.collection.count({**filters, "returned_date": None})
