from typing import Dict, Literal
from pydantic import BaseModel, ConfigDict, Field


class SortSpec(BaseModel):
    model_config = ConfigDict(frozen=True)

    key: str
    direction: Literal["asc", "desc"] = "asc"


class QueryState(BaseModel):
    model_config = ConfigDict(frozen=True)

    search_term: str = ""
    sort: SortSpec | None = None
    filter_values: Dict[str, str] = Field(default_factory=dict)

    def with_search(self, term: str) -> 'QueryState':
        return self.model_copy(update={"search_term": term})

    def with_filter(self, key: str, value: str) -> 'QueryState':
        return self.model_copy(update={"filter_values": {**self.filter_values, key: value}})

    def clear_filters(self) -> 'QueryState':
        return self.model_copy(update={"filter_values": {}})

    def toggle_sort(self, key: str) -> 'QueryState':
        """
        Cycles the sort on key: none -> asc -> desc -> none.
        Clicking a different column starts it ascending.
        """
        if self.sort is not None and self.sort.key == key:
            if self.sort.direction == "asc":
                return self.model_copy(update={"sort": SortSpec(key=key, direction="desc")})
            return self.model_copy(update={"sort": None})
        return self.model_copy(update={"sort": SortSpec(key=key)})

    def active_filters(self) -> Dict[str, str]:
        return {key: value for key, value in self.filter_values.items() if value}
