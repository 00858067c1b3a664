"""Protocol definitions for the engine's collaborators."""

from typing import Any, Callable, Mapping, Optional, Protocol, Union

from scrollfeed.core.outcomes import NotFound, TransportError

DataParams = Union[str, Mapping[str, Any], None]
ReportedError = Union[NotFound, TransportError]


class Collaborator(Protocol):
    def render(self, payload: Any) -> None: ...

    def report_error(self, error: ReportedError) -> None: ...

    def report_no_results(self, payload: Any) -> None: ...

    def persist_param(self, key: str, value: int) -> None: ...

    def report_count(self, count: int) -> None: ...

    def get_data_params(self) -> DataParams: ...

    def clear_contents(self) -> None: ...

    def scroll_to_latest(self) -> None: ...


class IndicatorPresenter(Protocol):
    def show_loading(self) -> None: ...

    def hide_loading(self) -> None: ...

    def show_load_more(self) -> None: ...

    def hide_load_more(self) -> None: ...

    def show_no_results(self) -> None: ...

    def hide_no_results(self) -> None: ...


class NullCollaborator:
    """Collaborator whose capabilities all do nothing.

    Subclass it and override only the hooks the host cares about.
    """

    def render(self, payload: Any) -> None:
        pass

    def report_error(self, error: ReportedError) -> None:
        pass

    def report_no_results(self, payload: Any) -> None:
        pass

    def persist_param(self, key: str, value: int) -> None:
        pass

    def report_count(self, count: int) -> None:
        pass

    def get_data_params(self) -> DataParams:
        return None

    def clear_contents(self) -> None:
        pass

    def scroll_to_latest(self) -> None:
        pass


class CallbackCollaborator(NullCollaborator):
    """Adapts plain callables to the Collaborator protocol."""

    def __init__(
        self,
        on_success: Optional[Callable[[Any], None]] = None,
        on_error: Optional[Callable[[ReportedError], None]] = None,
        on_no_results: Optional[Callable[[Any], None]] = None,
        update_param: Optional[Callable[[str, int], None]] = None,
        update_content_counter: Optional[Callable[[int], None]] = None,
        get_data_params: Optional[Callable[[], DataParams]] = None,
        clear_contents: Optional[Callable[[], None]] = None,
        scroll_to_latest: Optional[Callable[[], None]] = None,
    ):
        self._on_success = on_success
        self._on_error = on_error
        self._on_no_results = on_no_results
        self._update_param = update_param
        self._update_content_counter = update_content_counter
        self._get_data_params = get_data_params
        self._clear_contents = clear_contents
        self._scroll_to_latest = scroll_to_latest

    def render(self, payload: Any) -> None:
        if self._on_success:
            self._on_success(payload)

    def report_error(self, error: ReportedError) -> None:
        if self._on_error:
            self._on_error(error)

    def report_no_results(self, payload: Any) -> None:
        if self._on_no_results:
            self._on_no_results(payload)

    def persist_param(self, key: str, value: int) -> None:
        if self._update_param:
            self._update_param(key, value)

    def report_count(self, count: int) -> None:
        if self._update_content_counter:
            self._update_content_counter(count)

    def get_data_params(self) -> DataParams:
        if self._get_data_params:
            return self._get_data_params()
        return None

    def clear_contents(self) -> None:
        if self._clear_contents:
            self._clear_contents()

    def scroll_to_latest(self) -> None:
        if self._scroll_to_latest:
            self._scroll_to_latest()


class NullIndicatorPresenter:
    def show_loading(self) -> None:
        pass

    def hide_loading(self) -> None:
        pass

    def show_load_more(self) -> None:
        pass

    def hide_load_more(self) -> None:
        pass

    def show_no_results(self) -> None:
        pass

    def hide_no_results(self) -> None:
        pass
