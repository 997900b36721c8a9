from pydantic import BaseModel, ConfigDict


class TagSet(BaseModel):
    model_config = ConfigDict(frozen=True)

    pairs: list[tuple[str, str]] = []

    def lookup(self, key: str) -> tuple[str, bool]:
        """Return the value of the first pair named ``key`` and whether one exists."""
        for name, value in self.pairs:
            if name == key:
                return value, True
        return "", False

    def get(self, key: str) -> str | None:
        value, found = self.lookup(key)
        return value if found else None

    def keys(self) -> list[str]:
        return [name for name, _ in self.pairs]

    def as_dict(self) -> dict[str, str]:
        result: dict[str, str] = {}
        for name, value in self.pairs:
            result.setdefault(name, value)
        return result


class Import(BaseModel):
    model_config = ConfigDict(frozen=True)

    alias: str | None = None
    path_literal: str
    doc_comments: list[str] = []
    trailing_comments: list[str] = []


class Record(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str = ""
    comments: list[str] = []
    fields: list["RecordField"] = []


class RecordField(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    type_rendering: str
    doc_comments: list[str] = []
    trailing_comments: list[str] = []
    tag: TagSet | None = None
    raw_tag: str | None = None
    embedded_record: Record | None = None


Record.model_rebuild()  # necessary for recursive types


class File(BaseModel):
    model_config = ConfigDict(frozen=True)

    package_name: str
    path: str
    absolute_path: str
    imports: list[Import] | None = None
    records: list[Record] | None = None
