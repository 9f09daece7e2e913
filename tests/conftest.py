"""Shared test fixtures."""

from typing import Callable

import pytest

from arch_graph_sync.infrastructure import MemoryStorage, PreferencesStore
from arch_graph_sync.schemas import EngineConfig, HighlightStyle
from arch_graph_sync.services import (
    CommandPanel,
    GraphDataSource,
    SyncBus,
    SyncEngine,
)
from .factories import (
    EventRecorder,
    FakeClock,
    create_building_graph,
    create_highlight_style,
)


@pytest.fixture
def highlight_style_factory() -> Callable[..., HighlightStyle]:
    """Fixture that returns the highlight style factory function."""
    return create_highlight_style


@pytest.fixture
def config() -> EngineConfig:
    """Return the default engine configuration."""
    return EngineConfig()


@pytest.fixture
def storage() -> MemoryStorage:
    return MemoryStorage()


@pytest.fixture
def store(storage: MemoryStorage, config: EngineConfig) -> PreferencesStore:
    return PreferencesStore(
        storage,
        key=config.storage_key,
        default_divider_position=config.default_divider_position,
    )


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def engine(
    config: EngineConfig, store: PreferencesStore, clock: FakeClock
) -> SyncEngine:
    """Return an engine over in-memory storage with a deterministic clock."""
    return SyncEngine(config=config, store=store, bus=SyncBus(), clock=clock)


@pytest.fixture
def recorder(engine: SyncEngine):
    """Record every event the engine emits."""
    rec = EventRecorder(engine.bus)
    yield rec
    rec.close()


@pytest.fixture
def graph() -> GraphDataSource:
    return GraphDataSource(create_building_graph())


@pytest.fixture
def command_panel(engine: SyncEngine, graph: GraphDataSource) -> CommandPanel:
    return CommandPanel(engine, graph)
