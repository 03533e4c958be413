"""
Catalogue state container with async effect handlers

songapp/client/store.py

One CatalogueStore lives at the application root. Each request action
starts an asyncio task; starting a task for an action kind cancels the
in-flight task of the same kind, so only the newest request updates state.
"""
import asyncio
import logging
from typing import Any, Awaitable, Callable, Dict, List, Optional, Type

import httpx

from songapp.client.api import ApiError, SongApiClient
from songapp.client.state import (
    CatalogueState,
    CreateSongRequested,
    DeleteSongRequested,
    FetchSongsRequested,
    FetchStatisticsRequested,
    MutationFailed,
    SongCreated,
    SongDeleted,
    SongsFailed,
    SongsLoaded,
    SongUpdated,
    StatisticsFailed,
    StatisticsLoaded,
    UpdateSongRequested,
    reduce,
)

logger = logging.getLogger(__name__)

Listener = Callable[[CatalogueState], None]


def _error_message(error: Exception, fallback: str) -> str:
    if isinstance(error, ApiError):
        return error.detail or fallback
    return str(error) or fallback


class CatalogueStore:
    def __init__(self, api: SongApiClient, state: Optional[CatalogueState] = None):
        self.api = api
        self.state = state or CatalogueState()
        self._listeners: List[Listener] = []
        self._tasks: Dict[Type, asyncio.Task] = {}
        self._effects: Dict[Type, Callable[[Any], Awaitable[None]]] = {
            FetchSongsRequested: self._fetch_songs,
            CreateSongRequested: self._create_song,
            UpdateSongRequested: self._update_song,
            DeleteSongRequested: self._delete_song,
            FetchStatisticsRequested: self._fetch_statistics,
        }

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)
        return lambda: self._listeners.remove(listener)

    def dispatch(self, action: Any) -> Optional[asyncio.Task]:
        """Apply an action; request actions also start their effect task"""
        self.state = reduce(self.state, action)
        for listener in list(self._listeners):
            listener(self.state)

        effect = self._effects.get(type(action))
        if effect is None:
            return None
        return self._run_latest(type(action), effect(action))

    def _run_latest(self, kind: Type, coro: Awaitable[None]) -> asyncio.Task:
        previous = self._tasks.get(kind)
        if previous is not None and not previous.done():
            logger.debug(f"Cancelling superseded {kind.__name__} task")
            previous.cancel()
        task = asyncio.ensure_future(coro)
        self._tasks[kind] = task
        task.add_done_callback(lambda done: self._forget(kind, done))
        return task

    def _forget(self, kind: Type, task: asyncio.Task):
        if self._tasks.get(kind) is task:
            del self._tasks[kind]

    async def wait_idle(self):
        """Wait until no effect task is in flight"""
        while self._tasks:
            await asyncio.gather(*self._tasks.values(), return_exceptions=True)

    async def cancel_all(self):
        tasks = list(self._tasks.values())
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)

    # Effects

    async def _fetch_songs(self, action: FetchSongsRequested):
        try:
            result = await self.api.fetch_songs(self.state.filters)
        except (ApiError, httpx.HTTPError) as e:
            self.dispatch(SongsFailed(_error_message(e, "Failed to fetch songs")))
            return
        self.dispatch(SongsLoaded(tuple(result["data"]), result["pagination"]))
        self.dispatch(FetchStatisticsRequested())

    async def _create_song(self, action: CreateSongRequested):
        try:
            song = await self.api.create_song(action.data)
        except (ApiError, httpx.HTTPError) as e:
            self.dispatch(MutationFailed(_error_message(e, "Failed to create song")))
            return
        self.dispatch(SongCreated(song))
        self.dispatch(FetchStatisticsRequested())

    async def _update_song(self, action: UpdateSongRequested):
        try:
            song = await self.api.update_song(action.song_id, action.data)
        except (ApiError, httpx.HTTPError) as e:
            self.dispatch(MutationFailed(_error_message(e, "Failed to update song")))
            return
        self.dispatch(SongUpdated(song))
        self.dispatch(FetchStatisticsRequested())

    async def _delete_song(self, action: DeleteSongRequested):
        try:
            await self.api.delete_song(action.song_id)
        except (ApiError, httpx.HTTPError) as e:
            self.dispatch(MutationFailed(_error_message(e, "Failed to delete song")))
            return
        self.dispatch(SongDeleted(action.song_id))
        self.dispatch(FetchStatisticsRequested())

    async def _fetch_statistics(self, action: FetchStatisticsRequested):
        try:
            statistics = await self.api.fetch_statistics()
        except (ApiError, httpx.HTTPError) as e:
            self.dispatch(StatisticsFailed(_error_message(e, "Failed to fetch statistics")))
            return
        self.dispatch(StatisticsLoaded(statistics))
