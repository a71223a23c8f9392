"""Wires the client, manager and merge request creator together."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from .config import GitLabConfig
from .gitlab import GitLabClient
from .manager import GitLabManager
from .orchestrator import MergeRequestCreator, OutcomeCallback

logger = logging.getLogger(__name__)


class Registry:
    """Builds the object graph for one process invocation."""

    def __init__(
        self,
        config: GitLabConfig,
        on_outcome: OutcomeCallback | None = None,
        transport: httpx.BaseTransport | None = None,
    ):
        self.config = config
        self.client = GitLabClient(
            config.url,
            config.require_token(),
            timeout=config.timeout,
            transport=transport,
        )
        self.manager = GitLabManager(self.client)
        self.merge_request_creator = MergeRequestCreator(self.manager, policy=config.on_error, on_outcome=on_outcome)
        logger.debug("Registry ready for %s", config.url)

    def __enter__(self) -> Registry:
        return self

    def __exit__(self, *_exc_info: Any) -> None:
        self.client.close()
