from typing import AbstractSet

def is_excluded(database: str, blacklist: AbstractSet[str]) -> bool:
    return database in blacklist
