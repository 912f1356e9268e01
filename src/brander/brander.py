"""Orchestration of a full generation run."""
from __future__ import annotations

import time
from collections.abc import Callable
from typing import List

from pydantic import BaseModel, Field

from .config.config import Config
from .doc.document_context_parser import DocumentContextParser
from .doc.document_context_runner import DocumentContextRunner
from .doc.document_service import DocumentService
from .errors import BranderError
from .logging_utils import get_logger
from .task.task_context_parser import TaskContextParser
from .task.task_context_runner import TaskContextRunner
from .task.task_service import TaskService

logger = get_logger("run")


class StageResult(BaseModel):
    name: str
    status: str
    duration_seconds: float
    contexts: int = 0


class GenerationResult(BaseModel):
    stage_results: List[StageResult] = Field(default_factory=list)
    documents: List[str] = Field(default_factory=list)


class Brander:
    """Generates the assets and then the documentation described by a :class:`Config`.

    Services are created once per instance unless given, so registering a custom task or provider
    on them affects every later :meth:`generate` call.
    """

    def __init__(
        self,
        config: Config,
        task_service: TaskService | None = None,
        document_service: DocumentService | None = None,
    ) -> None:
        self.config = config
        self.task_service = task_service or TaskService()
        self.document_service = document_service or DocumentService()

    def generate(self, skip_assets: bool = False, skip_docs: bool = False) -> GenerationResult:
        config = self.config
        scope = config.scope
        result = GenerationResult()

        scope.clear()

        if skip_assets and skip_docs:
            config.logger.warning("Both skip_assets and skip_docs options enabled. Nothing to do!")
            return result

        if not skip_assets:
            config.logger.info("Generating assets...")
            result.stage_results.append(self._run_stage("assets", self._generate_assets))

        if not skip_docs:
            config.logger.info("Generating documentation...")
            result.stage_results.append(self._run_stage("docs", lambda: self._generate_docs(result)))

        config.logger.info("Done!")
        return result

    def _generate_assets(self) -> int:
        config = self.config
        parser = TaskContextParser(config.tasks, config)
        parser.on_parsed(lambda event: config.scope.add_all_tasks(event.contexts))
        runner = TaskContextRunner(parser, config, self.task_service)
        return len(runner.run())

    def _generate_docs(self, result: GenerationResult) -> int:
        config = self.config
        parser = DocumentContextParser(config.docs, config, self.document_service, default_type="root")
        parser.on_parsed(lambda event: config.scope.add_all_docs(event.contexts))

        # Every tree is parsed up front so documents can refer to those declared after them.
        contexts = parser.parse_remaining()
        runner = DocumentContextRunner(contexts, config, self.document_service)
        result.documents.extend(runner.run())
        return len(contexts)

    def _run_stage(self, name: str, stage: Callable[[], int]) -> StageResult:
        start = time.perf_counter()
        try:
            logger.debug("Running stage %s", name)
            contexts = stage()
        except BranderError as exc:
            logger.error("Stage %s failed: %s", name, exc)
            raise
        duration = time.perf_counter() - start
        return StageResult(name=name, status="completed", duration_seconds=duration, contexts=contexts)
