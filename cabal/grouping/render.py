"""Plain-text rendering of clique exports.

Example output for one threshold:

    At 2%
    Old: [003, 001, 002] max%: 1.8
         Absorbed 2:
              [001, 002] max%: 0.9
              [003, 004] max%: 1.2
         Added: 005
    New: [010, 011] max%: 1.9
"""

from cabal.grouping.clique import CliqueExport
from cabal.grouping.clique_set import CliqueSetElement, CliqueSetExport, NewClique
from cabal.grouping.evolution import ThresholdSnapshot
from cabal.similarity.types import format_percent


def render_clique(clique: CliqueExport) -> str:
    return f"[{', '.join(clique.names)}] max%: {format_percent(clique.max_score)}"


def render_element(element: CliqueSetElement) -> str:
    """Render one element; every line ends with a newline."""
    if isinstance(element, NewClique):
        return f"New: {render_clique(element.clique)}\n"

    lines = [f"Old: {render_clique(element.clique)}\n"]
    if len(element.merged) > 1:
        lines.append(f"     Absorbed {len(element.merged)}:\n")
        lines.extend(f"          {render_clique(merged)}\n" for merged in element.merged)
    if element.added:
        lines.append("     Added: " + "".join(f"{name} " for name in element.added) + "\n")
    return "".join(lines)


def render_clique_set(export: CliqueSetExport) -> str:
    return "".join(render_element(element) for element in export)


def render_snapshot(snapshot: ThresholdSnapshot) -> str:
    """Header line with the boundary as a percentage, then the cliques."""
    header = f"At {format_percent(snapshot.boundary)}%\n"
    return header + render_clique_set(snapshot.export)
