"""Tests for response models."""

import pytest

from yuihub_client_core.models import Health, SaveResponse, SearchHit, SearchResponse, ThreadResponse


@pytest.mark.unit
def test_health_from_dict():
    health = Health.from_dict({"ok": True, "version": "1.2.3", "environment": "prod", "uptime": 5})

    assert health.ok
    assert health.version == "1.2.3"
    assert health.extra == {"uptime": 5}
    assert health.summary() == "OK  version=1.2.3 env=prod"


@pytest.mark.unit
def test_health_summary_defaults():
    assert Health(ok=True).summary() == "OK  version=n/a env=n/a"
    assert Health(ok=False).summary() == "Not OK"


@pytest.mark.unit
def test_health_requires_ok():
    with pytest.raises(KeyError):
        Health.from_dict({"version": "1.2.3"})


@pytest.mark.unit
def test_search_response_from_dict():
    response = SearchResponse.from_dict(
        {
            "ok": True,
            "total": 2,
            "hits": [
                {"id": "n-1", "title": "Design", "score": 0.91234, "tags": ["adr"]},
                {"id": "n-2", "snippet": "s" * 100, "thread": "th-01"},
            ],
        }
    )

    assert response.total == 2
    assert [hit.id for hit in response.hits] == ["n-1", "n-2"]
    assert response.hits[0].tags == ["adr"]
    assert response.hits[0].description == "score:0.91"
    assert response.hits[1].label == "s" * 60


@pytest.mark.unit
def test_search_response_without_hits():
    response = SearchResponse.from_dict({"ok": False})

    assert response.hits == []
    assert response.total == 0


@pytest.mark.unit
def test_search_response_rejects_non_list_hits():
    with pytest.raises(TypeError):
        SearchResponse.from_dict({"ok": True, "total": 1, "hits": {"id": "n-1"}})


@pytest.mark.unit
def test_search_hit_label_falls_back_to_id():
    assert SearchHit(id="n-1").label == "n-1"


@pytest.mark.unit
def test_search_hit_insert_text():
    hit = SearchHit(id="n-1", thread="th-01", path="docs/adr.md", snippet="Use httpx.")

    assert hit.to_insert_text() == (
        "// YuiHub Search Hit\n// id: n-1\n// thread: th-01\n// path: docs/adr.md\nUse httpx."
    )


@pytest.mark.unit
def test_thread_response():
    assert ThreadResponse.from_dict({"ok": True, "data": {"thread": "th-02"}}).thread == "th-02"
    assert ThreadResponse.from_dict({"ok": True}).thread is None
    assert ThreadResponse.from_dict({"ok": True, "data": {"thread": ""}}).thread is None


@pytest.mark.unit
def test_save_response():
    response = SaveResponse.from_dict({"ok": True, "data": {"id": "n-9", "thread": "th-01", "when": "2024-01-01"}})

    assert response.data.id == "n-9"
    assert response.data.thread == "th-01"


@pytest.mark.unit
def test_save_response_with_incomplete_record():
    with pytest.raises(KeyError):
        SaveResponse.from_dict({"ok": True, "data": {"id": "n-9"}})


@pytest.mark.unit
def test_models_reject_non_objects():
    with pytest.raises(TypeError):
        Health.from_dict(["ok"])
