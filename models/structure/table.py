from typing import Any, Callable, List, Literal, Tuple
from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.json_schema import SkipJsonSchema

ColumnType = Literal["text", "number", "date", "boolean", "email", "phone", "select"]


class ColumnDescriptor(BaseModel):
    model_config = ConfigDict(frozen=True)

    # --- Query ---
    key: str
    type: ColumnType = "text"
    options: Tuple[str, ...] | None = None
    sortable: bool = True
    filterable: bool = True

    # --- Presentation ---
    label: str
    required: bool = False
    width: str | None = None
    format: SkipJsonSchema[Callable[[Any, Any], Any] | None] = Field(default=None, exclude=True)


class TableConfiguration(BaseModel):
    """
    Column set and feature toggles of one table screen.

    Immutable: every edit returns a new configuration, the previous one is
    left untouched.
    """
    model_config = ConfigDict(frozen=True)

    columns: Tuple[ColumnDescriptor, ...] = ()

    searchable: bool = True
    sortable: bool = True
    filterable: bool = True
    exportable: bool = True

    addable: bool = False
    editable: bool = False
    deletable: bool = False

    @model_validator(mode='after')
    def _check_unique_keys(self) -> 'TableConfiguration':
        seen = set()
        for column in self.columns:
            if column.key in seen:
                raise ValueError(f"Duplicate column key '{column.key}'")
            seen.add(column.key)
        return self

    def get_column(self, key: str) -> ColumnDescriptor | None:
        for column in self.columns:
            if column.key == key:
                return column
        return None

    def column_keys(self) -> List[str]:
        return [column.key for column in self.columns]

    def column_labels(self) -> List[str]:
        return [column.label for column in self.columns]

    def _replace(self, **changes: Any) -> 'TableConfiguration':
        return type(self)(**{**dict(self), **changes})

    def with_column(self, column: ColumnDescriptor) -> 'TableConfiguration':
        return self._replace(columns=(*self.columns, column))

    def without_column(self, key: str) -> 'TableConfiguration':
        return self._replace(columns=tuple(c for c in self.columns if c.key != key))

    def update_column(self, key: str, /, **changes: Any) -> 'TableConfiguration':
        """
        Re-keys, renames, retypes or re-flags one column. Unknown keys leave the
        columns as they are; a new key that clashes with another column raises ValueError.
        """
        columns = tuple(
            ColumnDescriptor(**{**dict(c), **changes}) if c.key == key else c
            for c in self.columns
        )
        return self._replace(columns=columns)

    def with_features(self, **toggles: bool) -> 'TableConfiguration':
        allowed = {"searchable", "sortable", "filterable", "exportable", "addable", "editable", "deletable"}
        unknown = set(toggles) - allowed
        if unknown:
            raise ValueError(f"Unknown table features: {sorted(unknown)}")
        return self._replace(**toggles)
