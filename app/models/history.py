from pydantic import BaseModel, Field
from typing import List


class RevisionOut(BaseModel):
    revision: int = Field(..., description="Revision id (also its Unix timestamp)")
    date: str = Field(..., description="git-style date, e.g. 'Sun Sep 9 01:46:40 2001 +0000'")
    author: str
    email: str
    message: str


class HistoryOut(BaseModel):
    slug: str
    count: int
    revisions: List[RevisionOut] = []
