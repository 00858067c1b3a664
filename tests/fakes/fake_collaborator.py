"""Collaborator fake that records every hook call."""

from typing import Any, List, Optional, Tuple

from scrollfeed.core.protocols import DataParams, NullCollaborator, ReportedError


class RecordingCollaborator(NullCollaborator):
    def __init__(self, data_params: DataParams = None, growth_per_render: float = 0):
        self.data_params = data_params
        self.growth_per_render = growth_per_render
        self.content_height: float = 0
        self.rendered: List[Any] = []
        self.errors: List[ReportedError] = []
        self.no_results: List[Any] = []
        self.params: List[Tuple[str, int]] = []
        self.counts: List[int] = []
        self.cleared = 0
        self.scrolled = 0

    def render(self, payload: Any) -> None:
        self.rendered.append(payload)
        self.content_height += self.growth_per_render

    def report_error(self, error: ReportedError) -> None:
        self.errors.append(error)

    def report_no_results(self, payload: Any) -> None:
        self.no_results.append(payload)

    def persist_param(self, key: str, value: int) -> None:
        self.params.append((key, value))

    def report_count(self, count: int) -> None:
        self.counts.append(count)

    def get_data_params(self) -> DataParams:
        return self.data_params

    def clear_contents(self) -> None:
        self.rendered.clear()
        self.content_height = 0
        self.cleared += 1

    def scroll_to_latest(self) -> None:
        self.scrolled += 1

    @property
    def last_error(self) -> Optional[ReportedError]:
        return self.errors[-1] if self.errors else None
