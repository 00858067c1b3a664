"""Dependency injection container."""

from dataclasses import dataclass, field
from typing import Callable, Optional

import httpx

from scrollfeed.config import AppPaths, ScrollSettings, SettingsManager
from scrollfeed.core.protocols import Collaborator, IndicatorPresenter
from scrollfeed.managers.infinite_scroll_engine import InfiniteScrollEngine
from scrollfeed.managers.scroll_trigger import ViewportGeometry
from scrollfeed.services.fetch_controller import FetchController


@dataclass
class ScrollContainer:
    settings: ScrollSettings
    paths: AppPaths
    collaborator: Optional[Collaborator] = None
    presenter: Optional[IndicatorPresenter] = None
    geometry: Optional[Callable[[], ViewportGeometry]] = None
    http_client: Optional[httpx.AsyncClient] = None

    _controller: Optional[FetchController] = field(
        default=None, init=False, repr=False
    )
    _engine: Optional[InfiniteScrollEngine] = field(
        default=None, init=False, repr=False
    )

    @property
    def controller(self) -> FetchController:
        if self._controller is None:
            self._controller = FetchController(
                route=self.settings.route,
                payload_shape=self.settings.payload_shape,
                timeout=self.settings.timeout_seconds,
                http_client=self.http_client,
            )
        return self._controller

    @property
    def engine(self) -> InfiniteScrollEngine:
        if self._engine is None:
            self._engine = InfiniteScrollEngine(
                settings=self.settings,
                controller=self.controller,
                collaborator=self.collaborator,
                presenter=self.presenter,
                geometry=self.geometry,
            )
        return self._engine

    async def aclose(self) -> None:
        if self._controller is not None:
            await self._controller.aclose()

    @classmethod
    def create(
        cls,
        settings: Optional[ScrollSettings] = None,
        paths: Optional[AppPaths] = None,
        collaborator: Optional[Collaborator] = None,
        presenter: Optional[IndicatorPresenter] = None,
        geometry: Optional[Callable[[], ViewportGeometry]] = None,
        http_client: Optional[httpx.AsyncClient] = None,
    ) -> "ScrollContainer":
        paths = paths or AppPaths.default()
        return cls(
            settings=settings or SettingsManager(paths.config_path).scroll,
            paths=paths,
            collaborator=collaborator,
            presenter=presenter,
            geometry=geometry,
            http_client=http_client,
        )
