from typing import Annotated

from pydantic import BaseModel, StringConstraints

# uuid4 strings in practice; any url-safe token is accepted
Identifier = Annotated[str, StringConstraints(min_length=1, max_length=64, pattern=r"^[A-Za-z0-9_-]+$")]


class Pagination(BaseModel):
    page: int
    limit: int
    total: int
    pages: int
