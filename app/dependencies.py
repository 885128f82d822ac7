from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from .auth.deps import current_active_user
from .auth.models import User
from .db.session import get_db_session


DBSessionDep = Annotated[AsyncSession, Depends(get_db_session)]

CurrentUserDep = Annotated[User, Depends(current_active_user)]
