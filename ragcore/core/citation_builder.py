"""
Citation extraction and formatting.

Builds citations from retrieval results and renders the context block
handed to the chat caller, one chunk per citation marker.

Dependencies: ragcore.models
System role: Citation formatting business logic
"""

from ragcore.models.citation import Citation
from ragcore.models.search import SearchResult, sort_by_score

CONTEXT_END_MARKER = "--- End of context ---"


class CitationBuilder:
    """Citation building business logic."""

    def build_citations(self, results: list[SearchResult]) -> list[Citation]:
        """
        Build citations from search results.

        Args:
            results: Vector search results (any order)

        Returns:
            list[Citation]: One citation per chunk, score-descending
        """
        citations: list[Citation] = []
        seen: set[str] = set()
        for result in sort_by_score(results):
            if result.chunk.chunk_id in seen:
                continue
            seen.add(result.chunk.chunk_id)
            citations.append(self.format_citation(result))
        return citations

    def format_citation(self, result: SearchResult) -> Citation:
        return Citation(
            source_name=result.chunk.source_name,
            chunk_id=result.chunk.chunk_id,
            score=result.score,
        )

    def format_context(self, results: list[SearchResult]) -> str:
        """
        Render retrieved chunks under their citation markers.

        Args:
            results: Vector search results

        Returns:
            str: Context block, empty string when there are no results
        """
        if not results:
            return ""

        by_id = {r.chunk.chunk_id: r for r in results}
        lines: list[str] = []
        for citation in self.build_citations(results):
            lines.append(f"--- {citation.marker} ---")
            lines.append(by_id[citation.chunk_id].chunk.content)
            lines.append("")
        lines.append(CONTEXT_END_MARKER)
        return "\n".join(lines)
