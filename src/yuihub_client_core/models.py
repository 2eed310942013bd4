"""Response models for the YuiHub endpoints.

Each model is built from a decoded JSON object with ``from_dict``. Missing
required keys or wrong types raise ``KeyError``/``TypeError``/``ValueError``,
which the request executor reports as a malformed response.
"""

from dataclasses import dataclass, field
from typing import Any


def _require_mapping(data: Any, what: str) -> dict[str, Any]:
    if not isinstance(data, dict):
        raise TypeError(f"{what} must be a JSON object, got {type(data).__name__}")
    return data


@dataclass
class Health:
    """``GET /health`` payload."""

    ok: bool
    environment: str | None = None
    version: str | None = None
    extra: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Any) -> "Health":
        data = _require_mapping(data, "health response")
        extra = {k: v for k, v in data.items() if k not in {"ok", "environment", "version"}}
        return cls(
            ok=bool(data["ok"]),
            environment=data.get("environment"),
            version=data.get("version"),
            extra=extra,
        )

    def summary(self) -> str:
        if not self.ok:
            return "Not OK"
        return f"OK  version={self.version or 'n/a'} env={self.environment or 'n/a'}"


@dataclass
class SearchHit:
    id: str
    title: str | None = None
    snippet: str | None = None
    thread: str | None = None
    path: str | None = None
    url: str | None = None
    score: float | None = None
    date: str | None = None
    tags: list[str] = field(default_factory=list)
    source: str | None = None

    @classmethod
    def from_dict(cls, data: Any) -> "SearchHit":
        data = _require_mapping(data, "search hit")
        score = data.get("score")
        return cls(
            id=str(data["id"]),
            title=data.get("title"),
            snippet=data.get("snippet"),
            thread=data.get("thread"),
            path=data.get("path"),
            url=data.get("url"),
            score=float(score) if score is not None else None,
            date=data.get("date"),
            tags=list(data.get("tags") or []),
            source=data.get("source"),
        )

    @property
    def label(self) -> str:
        """Short display label: title, else the start of the snippet, else the id."""
        return self.title or (self.snippet or "")[:60] or self.id

    @property
    def description(self) -> str:
        score = f"{self.score:.2f}" if self.score is not None else ""
        return f"{self.thread or ''}  score:{score}".strip()

    def to_insert_text(self) -> str:
        """Comment block used when a hit is inserted into a document."""
        return (
            "// YuiHub Search Hit\n"
            f"// id: {self.id}\n"
            f"// thread: {self.thread or ''}\n"
            f"// path: {self.path or ''}\n"
            f"{self.snippet or ''}"
        )


@dataclass
class SearchResponse:
    """``GET /search`` payload."""

    ok: bool
    total: int
    hits: list[SearchHit] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> "SearchResponse":
        data = _require_mapping(data, "search response")
        hits = data.get("hits") or []
        if not isinstance(hits, list):
            raise TypeError("hits must be a list")
        return cls(
            ok=bool(data["ok"]),
            total=int(data.get("total", len(hits))),
            hits=[SearchHit.from_dict(hit) for hit in hits],
        )


@dataclass
class ThreadResponse:
    """``POST /threads/new`` payload."""

    ok: bool
    thread: str | None = None

    @classmethod
    def from_dict(cls, data: Any) -> "ThreadResponse":
        data = _require_mapping(data, "thread response")
        payload = data.get("data") or {}
        payload = _require_mapping(payload, "thread response data")
        return cls(ok=bool(data["ok"]), thread=payload.get("thread") or None)


@dataclass
class SaveRecord:
    id: str
    thread: str
    when: str


@dataclass
class SaveResponse:
    """``POST /save`` payload."""

    ok: bool
    data: SaveRecord | None = None

    @classmethod
    def from_dict(cls, data: Any) -> "SaveResponse":
        data = _require_mapping(data, "save response")
        record = data.get("data")
        if record is not None:
            record = _require_mapping(record, "save response data")
            record = SaveRecord(id=str(record["id"]), thread=str(record["thread"]), when=str(record["when"]))
        return cls(ok=bool(data["ok"]), data=record)
