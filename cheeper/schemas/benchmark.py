from pydantic import BaseModel
from typing import List


class SeedSummary(BaseModel):
    users: int
    friendships: int
    messages: int


class BenchmarkReport(BaseModel):
    request_counts: List[int]
    write_seconds: List[float]
    read_seconds: List[float]
