"""
Hierarchical map-reduce summarizer.

Produces one summary from any number of chunks while keeping every reduce
call under a token ceiling:
1. Map: summarize every chunk concurrently (bounded by a semaphore)
2. Collect: measure each summary's tokens once
3. Collapse: pack summaries into token-bounded groups and reduce each
   group, repeating while the total still exceeds the ceiling
4. Finalize: one reduce call over the remaining summaries

Dependencies: asyncio, langchain_core.messages, vaultmind.boundary.llm
System role: Note generation engine
"""

import asyncio
import logging
from collections.abc import Sequence

from langchain_core.messages import HumanMessage

from vaultmind.boundary.llm.gateway import BaseLanguageModelGateway, message_text
from vaultmind.core.agentic_system.summarizer.summarizer_prompt import (
    build_map_prompt,
    build_reduce_prompt,
)
from vaultmind.core.agentic_system.summarizer.summarizer_schema import (
    SummarizationState,
    SummarizerStep,
    SummaryUnit,
)
from vaultmind.core.exceptions import NonConvergenceError, NotFoundError, ValidationError

logger = logging.getLogger(__name__)

DEFAULT_TOKEN_MAX = 1000
DEFAULT_MAX_COLLAPSE_ITERATIONS = 10
DEFAULT_MAP_CONCURRENCY = 5


def split_into_groups(units: Sequence[SummaryUnit], token_max: int) -> list[list[SummaryUnit]]:
    """
    Greedily pack consecutive units into groups of at most token_max tokens.

    A unit larger than token_max on its own still forms its own group. When
    no two units could be packed together, units are paired consecutively
    so that one collapse always shrinks the working set.

    Args:
        units: Units in source order
        token_max: Token ceiling per group

    Returns:
        list[list[SummaryUnit]]: Non-empty groups preserving order
    """
    groups: list[list[SummaryUnit]] = []
    current: list[SummaryUnit] = []
    current_tokens = 0

    for unit in units:
        if current and current_tokens + unit.token_count > token_max:
            groups.append(current)
            current = []
            current_tokens = 0
        current.append(unit)
        current_tokens += unit.token_count

    if current:
        groups.append(current)

    if len(units) > 1 and len(groups) == len(units):
        groups = [list(units[i:i + 2]) for i in range(0, len(units), 2)]

    return groups


class MapReduceSummarizer:
    """
    Token-budget-aware summarizer over a language model gateway.

    Stateless between runs; each summarize() call owns its own
    SummarizationState.
    """

    def __init__(
        self,
        gateway: BaseLanguageModelGateway,
        token_max: int = DEFAULT_TOKEN_MAX,
        max_collapse_iterations: int = DEFAULT_MAX_COLLAPSE_ITERATIONS,
        map_concurrency: int = DEFAULT_MAP_CONCURRENCY,
    ) -> None:
        """
        Initialize summarizer.

        Args:
            gateway: Language model gateway for summaries and token counts
            token_max: Token ceiling for the collapsed working set
            max_collapse_iterations: Collapse rounds allowed before failing
            map_concurrency: Maximum simultaneous map calls

        Raises:
            ValidationError: If any bound is not positive
        """
        if token_max <= 0:
            raise ValidationError("token_max must be positive", field="token_max")
        if max_collapse_iterations <= 0:
            raise ValidationError(
                "max_collapse_iterations must be positive",
                field="max_collapse_iterations",
            )
        if map_concurrency <= 0:
            raise ValidationError("map_concurrency must be positive", field="map_concurrency")

        self._gateway = gateway
        self._token_max = token_max
        self._max_collapse_iterations = max_collapse_iterations
        self._map_concurrency = map_concurrency

    @property
    def token_max(self) -> int:
        return self._token_max

    async def summarize(self, contents: Sequence[str]) -> str:
        """
        Summarize contents into one final summary.

        Args:
            contents: Chunk texts in source order

        Returns:
            str: Final summary

        Raises:
            NotFoundError: If there is no content
            NonConvergenceError: If collapsing does not get under the ceiling
            Exception: Gateway errors propagate unchanged
        """
        state = await self.run(contents)
        return state.final or ""

    async def run(self, contents: Sequence[str]) -> SummarizationState:
        """Drive the state machine and return the finished state."""
        if not contents:
            raise NotFoundError("No content to summarize")

        state = SummarizationState(contents=list(contents))
        logger.info(
            f"{__name__}:run - START chunks={len(state.contents)}, token_max={self._token_max}"
        )

        while state.step is not SummarizerStep.END:
            if state.step is SummarizerStep.MAP:
                await self._map(state)
                state.step = SummarizerStep.COLLECT
            elif state.step is SummarizerStep.COLLECT:
                state.collapsed = list(state.summaries)
                state.step = self._route(state)
            elif state.step is SummarizerStep.COLLAPSE:
                await self._collapse(state)
                state.step = self._route(state)
            elif state.step is SummarizerStep.FINALIZE:
                await self._finalize(state)
                state.step = SummarizerStep.END

        logger.info(
            f"{__name__}:run - END collapse_iterations={state.collapse_iterations}, "
            f"final_len={len(state.final or '')}"
        )
        return state

    def _route(self, state: SummarizationState) -> SummarizerStep:
        """Collapse again while the global total exceeds the ceiling."""
        total = state.total_tokens
        if total <= self._token_max:
            return SummarizerStep.FINALIZE

        if state.collapse_iterations >= self._max_collapse_iterations:
            logger.error(
                f"{__name__}:_route - No convergence after {state.collapse_iterations} "
                f"iterations, total_tokens={total}"
            )
            raise NonConvergenceError(
                iterations=state.collapse_iterations,
                total_tokens=total,
                token_max=self._token_max,
            )
        return SummarizerStep.COLLAPSE

    async def _map(self, state: SummarizationState) -> None:
        """Summarize every chunk; order of results follows input order."""
        semaphore = asyncio.Semaphore(self._map_concurrency)

        async def map_one(content: str) -> SummaryUnit:
            async with semaphore:
                return await self._summarize_text(build_map_prompt(content))

        tasks = [asyncio.ensure_future(map_one(content)) for content in state.contents]
        try:
            units = await asyncio.gather(*tasks)
        except Exception:
            for task in tasks:
                task.cancel()
            raise

        state.summaries.extend(units)
        logger.info(f"{__name__}:_map - Produced {len(units)} summaries")

    async def _collapse(self, state: SummarizationState) -> None:
        """Reduce every token-bounded group once; groups run in order."""
        groups = split_into_groups(state.collapsed, self._token_max)
        state.collapse_iterations += 1

        logger.info(
            f"{__name__}:_collapse - Iteration {state.collapse_iterations}: "
            f"units={len(state.collapsed)}, groups={len(groups)}, total_tokens={state.total_tokens}"
        )

        reduced: list[SummaryUnit] = []
        for group in groups:
            reduced.append(
                await self._summarize_text(build_reduce_prompt([unit.content for unit in group]))
            )
        state.collapsed = reduced

    async def _finalize(self, state: SummarizationState) -> None:
        prompt = build_reduce_prompt([unit.content for unit in state.collapsed])
        response = await self._gateway.complete([HumanMessage(content=prompt)])
        state.final = message_text(response)

    async def _summarize_text(self, prompt: str) -> SummaryUnit:
        response = await self._gateway.complete([HumanMessage(content=prompt)])
        content = message_text(response)
        token_count = await self._gateway.count_tokens(content)
        return SummaryUnit(content=content, token_count=token_count)
