from typing import Optional, Union
from unitycure.exceptions import UserExistsException
from unitycure.models.user import User
from unitycure.schemas.user import UserCreate
from unitycure.store.collections import Collections


class UserService:
    def __init__(self, collections: Collections):
        self.users = collections.users

    async def register(self, data: Union[UserCreate, dict]) -> User:
        """
        Create a user. Raises UserExistsException when the identifier is taken,
        whether caught by the lookup or by the unique constraint on a race.
        """
        data = data if isinstance(data, UserCreate) else UserCreate.model_validate(data)
        if await self.users.find_by_identifier(data.identifier):
            raise UserExistsException(data.identifier)
        return await self.users.insert(data)

    async def authenticate(self, identifier: str, password: str) -> Optional[User]:
        user = await self.users.find_by_identifier(identifier)
        if user is None or user.password != password:
            return None
        return user
