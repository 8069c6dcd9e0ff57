from typing import List, Optional

from app.db.base import Collection
from app.models.user import User, UserCreate
from app.models.base import utcnow
from app.repositories.base import record_from_doc

class UserRepository:
    """User storage operations."""
    
    def __init__(self, collection: Collection):
        self.collection = collection
    
    async def create_user(self, user_data: UserCreate) -> User:
        """Create a new user."""
        user_dict = {
            "_id": await self.collection.next_id(),
            "name": user_data.name,
            "email": user_data.email,
            "phone": user_data.phone,
            "created_at": utcnow()
        }
        
        await self.collection.insert(user_dict)
        return User(**record_from_doc(user_dict))
    
    async def list_users(self) -> List[User]:
        """List users in id order."""
        docs = await self.collection.list()
        return [User(**record_from_doc(doc)) for doc in docs]
    
    async def get_user_by_id(self, user_id: int) -> Optional[User]:
        """Get user by ID."""
        doc = await self.collection.get(user_id)
        if doc:
            return User(**record_from_doc(doc))
        return None
    
    async def update_user(self, user_id: int, update_data: dict) -> Optional[User]:
        """Update user."""
        if not update_data:
            return await self.get_user_by_id(user_id)

        doc = await self.collection.update(user_id, update_data)
        if doc:
            return User(**record_from_doc(doc))
        return None
    
    async def delete_user(self, user_id: int) -> bool:
        """Delete user."""
        return await self.collection.delete(user_id)

    async def count_users(self) -> int:
        return await self.collection.count()
