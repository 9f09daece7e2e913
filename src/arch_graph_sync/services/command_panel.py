"""Command panel - turns structured command records into engine calls.

The natural-language service that produces ``CommandResponse`` records is
external. This consumer only resolves a record against the graph data
source and calls the same engine operations any other view would, tagged
with the ``control`` source.
"""

import logging
from collections import defaultdict
from collections.abc import Iterable

from pydantic import ValidationError

from arch_graph_sync.schemas import (
    CommandOperation,
    CommandPayload,
    CommandResponse,
    HighlightCategory,
    HighlightIntensity,
    SelectionSource,
    default_highlight_style,
)
from arch_graph_sync.services.engine import SyncEngine
from arch_graph_sync.services.graph_source import (
    GraphDataSource,
    highlight_category_for,
)

logger = logging.getLogger(__name__)

# Operations the 3D viewer carries out on its own; nothing to synchronize.
VIEWER_ONLY_OPERATIONS = {
    CommandOperation.HIDE,
    CommandOperation.ROTATE_LEFT,
    CommandOperation.ROTATE_RIGHT,
    CommandOperation.UNKNOWN,
}


def parse_command_response(raw: str | bytes) -> CommandResponse:
    """Validate raw service output, falling back to an UNKNOWN response."""
    try:
        return CommandResponse.model_validate_json(raw)
    except ValidationError as e:
        logger.warning(f"Unparseable command response ({e.error_count()} errors)")
        return CommandResponse.unknown(
            "I had trouble processing that request. Could you try asking differently?"
        )


class CommandPanel:
    """Applies command records to the shared selection.

    Attributes:
        engine: The session's synchronization engine.
        graph: Data source the filters are resolved against.
        results: Ids highlighted by the last ISOLATE/COLOR_CODE command.
    """

    def __init__(self, engine: SyncEngine, graph: GraphDataSource) -> None:
        self.engine = engine
        self.graph = graph
        self.results: list[str] = []

    def handle_response(self, raw: str | bytes) -> list[str]:
        """Parse raw service output and apply it."""
        return self.apply(parse_command_response(raw))

    def apply(self, payload: CommandPayload) -> list[str]:
        """Apply one command record.

        Returns:
            Ids the command matched (empty for RESET and viewer-only
            operations).
        """
        operation = payload.operation
        logger.info(
            f"Command {operation.value}: category={payload.category}, "
            f"level={payload.level}, material={payload.material}"
        )

        if operation is CommandOperation.RESET:
            self.engine.clear_highlights(source=SelectionSource.CONTROL)
            self.results = []
            return []

        if operation in VIEWER_ONLY_OPERATIONS:
            logger.debug(f"{operation.value} is handled by the viewer")
            return []

        matches: list[str] = []
        if payload.has_filter:
            matches = self.graph.find_nodes(
                category=payload.category,
                level=payload.level,
                material=payload.material,
            )
        if not matches:
            logger.info("Command matched no elements")
            if operation is not CommandOperation.SELECT:
                self._drop_results()
            return []

        if operation is CommandOperation.SELECT:
            self.engine.select_elements(matches, SelectionSource.CONTROL)
            self._highlight(matches, HighlightIntensity.SELECTED)
        else:
            # ISOLATE and COLOR_CODE replace the previous result set.
            matched = set(matches)
            stale = [i for i in self.results if i not in matched]
            if stale:
                self.engine.unhighlight_elements(stale)
            self._highlight(matches, HighlightIntensity.RESULT)
            self.results = matches

        return matches

    def _drop_results(self) -> None:
        """Unhighlight the previous ISOLATE/COLOR_CODE result set."""
        if self.results:
            self.engine.unhighlight_elements(self.results)
            self.results = []

    def _highlight(
        self, element_ids: Iterable[str], intensity: HighlightIntensity
    ) -> None:
        groups: dict[HighlightCategory, list[str]] = defaultdict(list)
        for element_id in element_ids:
            node = self.graph.get_node(element_id)
            category = (
                highlight_category_for(node) if node else HighlightCategory.ELEMENT
            )
            groups[category].append(element_id)

        for category, ids in groups.items():
            self.engine.highlight_elements(
                ids, default_highlight_style(category, intensity)
            )
