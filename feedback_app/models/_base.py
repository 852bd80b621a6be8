from datetime import date, datetime, timezone

def utcnow():
    return datetime.now(timezone.utc)

def _plain(value):
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    return value

class RowMixin:
    """Dict round-tripping for the generic record store."""

    @classmethod
    def column_names(cls) -> set:
        return {c.key for c in cls.__table__.columns}

    def to_dict(self) -> dict:
        return {c.key: _plain(getattr(self, c.key)) for c in self.__table__.columns}

    def apply(self, row: dict) -> None:
        cols = self.column_names()
        for key, value in row.items():
            if key in cols:
                setattr(self, key, value)
