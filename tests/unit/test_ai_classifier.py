from __future__ import annotations

import asyncio
import json

import aiohttp

from sfx_renamer.application.classification import AIClassifier, parse_classification_response
from sfx_renamer.domain.exceptions import TranslationError


class FakeCompleter:
    """Answers every prompt with a canned response and records the prompts."""

    def __init__(self, response="", error=None):
        self.response = response
        self.error = error
        self.prompts = []

    async def complete(self, prompt):
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return self.response


def response_for(*pairs):
    return json.dumps({
        "results": [
            {"filename": name, "classification": {"catID": cat_id, "category": "X", "subCategory": None}}
            for name, cat_id in pairs
        ]
    })


def test_parse_plain_json():
    parsed = parse_classification_response(response_for(("door slam", "DOORWood")))
    assert parsed == {"door slam": {"catID": "DOORWood", "category": "X"}}


def test_parse_fenced_block_with_trailing_comma():
    response = (
        "Here you go:\n```json\n"
        '{"results": [{"filename": "wind", "classification": {"catID": "AMBWind",}},]}'
        "\n```"
    )
    assert parse_classification_response(response) == {"wind": {"catID": "AMBWind"}}


def test_parse_embedded_object():
    response = 'Result: {"results": [{"filename": "boom", "classification": {"catID": "EXPLReal"}}]} done'
    assert parse_classification_response(response)["boom"]["catID"] == "EXPLReal"


def test_parse_garbage():
    assert parse_classification_response("") == {}
    assert parse_classification_response("no json here") == {}
    assert parse_classification_response("{broken") == {}
    assert parse_classification_response('{"results": "nope"}') == {}


def test_parse_skips_items_without_cat_id():
    response = json.dumps({"results": [
        {"filename": "a", "classification": {"catID": None}},
        {"filename": "", "classification": {"catID": "X"}},
        {"filename": "b", "classification": {"catID": "FOL001"}},
    ]})
    assert list(parse_classification_response(response)) == ["b"]


def test_prompt_lists_catalogue_ids(catalogue):
    classifier = AIClassifier(FakeCompleter(), catalogue)
    prompt = classifier.build_prompt(["door slam"])
    assert "FOL001" in prompt
    assert "door slam" in prompt


def test_classify_batch_splits_and_caches(catalogue):
    names = [f"file{i}" for i in range(7)]
    completer = FakeCompleter(response_for(*[(n, "FOL001") for n in names]))
    classifier = AIClassifier(completer, catalogue, batch_size=5)

    results = asyncio.run(classifier.classify_batch(names))
    assert len(results) == 7
    assert len(completer.prompts) == 2

    asyncio.run(classifier.classify_batch(names))
    assert len(completer.prompts) == 2

    assert asyncio.run(classifier.classify("file3")) == {"catID": "FOL001", "category": "X"}


def test_failures_are_not_cached(catalogue):
    completer = FakeCompleter(error=TranslationError("offline"))
    classifier = AIClassifier(completer, catalogue)

    assert asyncio.run(classifier.classify("wind")) == {}

    completer.error = None
    completer.response = response_for(("wind", "AMBWind"))
    assert asyncio.run(classifier.classify("wind"))["catID"] == "AMBWind"
    assert len(completer.prompts) == 2


def test_completion_not_supported(catalogue):
    classifier = AIClassifier(FakeCompleter(error=NotImplementedError()), catalogue)
    assert asyncio.run(classifier.classify_batch(["wind"])) == {}


def test_network_error_yields_empty_hints(catalogue):
    completer = FakeCompleter(error=aiohttp.ClientConnectionError("connection refused"))
    classifier = AIClassifier(completer, catalogue, batch_size=1)

    assert asyncio.run(classifier.classify_batch(["wind", "door"])) == {}
    assert len(completer.prompts) == 2


def test_missing_completion_stops_after_first_batch(catalogue):
    completer = FakeCompleter(error=NotImplementedError())
    classifier = AIClassifier(completer, catalogue, batch_size=1)

    assert asyncio.run(classifier.classify_batch(["wind", "door", "glass"])) == {}
    assert len(completer.prompts) == 1
