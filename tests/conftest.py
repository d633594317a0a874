"""Shared fixtures: an in-memory plans collection and a mocked Gemini endpoint."""

from __future__ import annotations

import copy
import json
from datetime import datetime
from types import SimpleNamespace
from typing import Any, Callable, Dict, List

import httpx
import pytest

from task_planner.run_utils import metrics
from task_planner.run_utils.db import PlanStore
from task_planner.run_utils.llm import GeminiClient


class InMemoryCollection:
    """The subset of pymongo's Collection API used by PlanStore."""

    def __init__(self) -> None:
        self.docs: Dict[Any, Dict[str, Any]] = {}

    def insert_one(self, doc: Dict[str, Any]) -> SimpleNamespace:
        stored = copy.deepcopy(doc)
        for key, value in stored.items():
            # BSON dates keep milliseconds only
            if isinstance(value, datetime):
                stored[key] = value.replace(microsecond=value.microsecond // 1000 * 1000)
        self.docs[doc["_id"]] = stored
        return SimpleNamespace(inserted_id=doc["_id"])

    def find_one(self, query: Dict[str, Any]) -> Dict[str, Any] | None:
        doc = self.docs.get(query["_id"])
        return copy.deepcopy(doc) if doc else None

    def delete_one(self, query: Dict[str, Any]) -> SimpleNamespace:
        removed = self.docs.pop(query["_id"], None)
        return SimpleNamespace(deleted_count=1 if removed else 0)


def envelope(text: str) -> str:
    return json.dumps({"candidates": [{"content": {"parts": [{"text": text}]}}]})


@pytest.fixture(autouse=True)
def clean_metrics() -> None:
    metrics.reset()


@pytest.fixture
def collection() -> InMemoryCollection:
    return InMemoryCollection()


@pytest.fixture
def store(collection: InMemoryCollection) -> PlanStore:
    return PlanStore(collection=collection)


@pytest.fixture
def make_gemini() -> Callable[..., GeminiClient]:
    """Build a GeminiClient whose HTTP traffic goes to ``handler``; requests are recorded."""

    def _make(handler: Callable[[httpx.Request], httpx.Response], requests: List[httpx.Request] | None = None) -> GeminiClient:
        def _record(request: httpx.Request) -> httpx.Response:
            if requests is not None:
                requests.append(request)
            return handler(request)

        return GeminiClient(
            api_key="test-key",
            model="gemini-test",
            base_url="https://gemini.example/v1",
            timeout_s=5,
            max_concurrency=2,
            transport=httpx.MockTransport(_record),
        )

    return _make
