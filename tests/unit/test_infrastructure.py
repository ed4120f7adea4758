from __future__ import annotations

import asyncio
import json

import pytest

from sfx_renamer.core.config import NLPServiceSettings
from sfx_renamer.domain.exceptions import NLPServiceError, RenameError
from sfx_renamer.domain.models import PartOfSpeech
from sfx_renamer.infrastructure.cache import BoundedCache, CacheStats, EvictionPolicy
from sfx_renamer.infrastructure.external_apis import NLPServiceClient
from sfx_renamer.infrastructure.file_system import LocalFileHost


# ----------------------------------------------------------------------
# Cache
# ----------------------------------------------------------------------

def test_lru_policy_refreshes_on_read():
    cache = BoundedCache(max_size=2)
    cache.set("脚步", 1)
    cache.set("关门", 2)
    assert cache.get("脚步") == 1
    cache.set("风声", 3)
    assert cache.keys() == ["脚步", "风声"]
    assert cache.stats.evictions == 1


def test_fifo_policy_ignores_reads():
    evicted = []
    cache = BoundedCache(max_size=2, policy=EvictionPolicy.FIFO, on_evict=lambda k, v: evicted.append(k))
    cache.set("脚步", 1)
    cache.set("关门", 2)
    cache.get("脚步")
    cache.set("关门", 20)
    cache.set("风声", 3)
    assert "脚步" not in cache
    assert evicted == ["脚步"]
    assert cache.keys() == ["关门", "风声"]


def test_cache_snapshot_counts_lookups():
    cache = BoundedCache(max_size=5)
    cache.set("door", "门")
    cache.get("door")
    assert cache.get("missing", "default") == "default"
    assert cache.snapshot() == {"size": 1, "hits": 1, "misses": 1, "evictions": 0, "hit_rate": 0.5}
    cache.clear()
    assert len(cache) == 0
    assert cache.stats == CacheStats()


def test_cache_ttl(monkeypatch):
    now = [1000.0]
    monkeypatch.setattr("sfx_renamer.infrastructure.cache.bounded_cache.time.time", lambda: now[0])
    cache = BoundedCache(max_size=5, ttl=10)
    cache.set("a", 1)
    assert "a" in cache
    now[0] += 11
    assert "a" not in cache
    assert cache.get("a") is None
    assert len(cache) == 0


def test_cache_rejects_zero_size():
    with pytest.raises(ValueError):
        BoundedCache(max_size=0)


def test_empty_stats_hit_rate():
    assert CacheStats().hit_rate == 0.0
    assert CacheStats(hits=3, misses=1).to_dict()["hit_rate"] == 0.75


# ----------------------------------------------------------------------
# NLP service
# ----------------------------------------------------------------------

def service_body(items):
    return json.dumps({"Code": "200", "Data": json.dumps({"success": True, "result": items})})


def test_parse_nlp_response():
    words = NLPServiceClient.parse_response(service_body([
        {"word": "关门", "pos": "VV"},
        {"word": "声音", "pos": "NN"},
        {"word": "，", "pos": "PU"},
    ]))
    assert [(w.word, w.pos, w.weight) for w in words] == [
        ("关门", PartOfSpeech.VERB, 70),
        ("声音", PartOfSpeech.NOUN, 120),
        ("，", PartOfSpeech.OTHER, 5),
    ]


@pytest.mark.parametrize("body", [
    "not json",
    json.dumps({"Code": "500", "Message": "error"}),
    json.dumps({"Data": json.dumps({"success": False})}),
    service_body([]),
])
def test_parse_nlp_response_failures(body):
    with pytest.raises(NLPServiceError):
        NLPServiceClient.parse_response(body)


def test_disabled_client_raises():
    client = NLPServiceClient(NLPServiceSettings())
    assert not client.enabled
    with pytest.raises(NLPServiceError):
        asyncio.run(client.analyze_pos("关门声"))


def test_daily_limit():
    client = NLPServiceClient(NLPServiceSettings(enabled=True, endpoint="http://127.0.0.1:9", daily_limit=0))
    with pytest.raises(NLPServiceError, match="limit"):
        asyncio.run(client.analyze_pos("关门声"))
    assert client.requests_today == 0


# ----------------------------------------------------------------------
# Local file host
# ----------------------------------------------------------------------

@pytest.fixture
def sound_dir(tmp_path):
    for name in ("door slam 01.wav", "Wind.FLAC", "notes.txt", ".hidden.wav"):
        (tmp_path / name).write_bytes(b"")
    (tmp_path / "sub").mkdir()
    (tmp_path / "sub" / "glass.wav").write_bytes(b"")
    return tmp_path


def test_local_host_lists_audio_files(sound_dir):
    host = LocalFileHost(sound_dir, extensions=("wav", "flac"))
    items = asyncio.run(host.get_selected())
    assert [item["id"] for item in items] == ["Wind.FLAC", "door slam 01.wav"]
    assert items[1]["name"] == "door slam 01"
    assert items[1]["ext"] == "wav"


def test_local_host_recursive_and_folder(sound_dir):
    recursive = LocalFileHost(sound_dir, extensions=("wav",), recursive=True)
    ids = [item["id"] for item in asyncio.run(recursive.get_selected())]
    assert "sub/glass.wav" in ids

    host = LocalFileHost(sound_dir)
    assert [i["id"] for i in asyncio.run(host.get_by_folder("sub"))] == ["sub/glass.wav"]
    assert asyncio.run(host.get_by_folder("missing")) == []
    assert asyncio.run(host.get_by_tag("foley")) == []


def test_local_host_rename(sound_dir):
    host = LocalFileHost(sound_dir)
    asyncio.run(host.rename("door slam 01.wav", "DOORWood_Door Slam_01.wav"))
    assert (sound_dir / "DOORWood_Door Slam_01.wav").exists()
    assert not (sound_dir / "door slam 01.wav").exists()


def test_local_host_rename_errors(sound_dir):
    host = LocalFileHost(sound_dir)
    with pytest.raises(RenameError):
        asyncio.run(host.rename("missing.wav", "x.wav"))
    with pytest.raises(RenameError) as error:
        asyncio.run(host.rename("door slam 01.wav", "notes.txt"))
    assert error.value.item_id == "door slam 01.wav"
