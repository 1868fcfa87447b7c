"""Tests for the streaming example."""


class TestStreamingApp:
    """Verify render_stream_async() yields ordered chunks with correct content."""

    def test_yields_multiple_chunks(self, example_app) -> None:
        assert len(example_app.chunks) > 1

    def test_layout_opens_first(self, example_app) -> None:
        assert example_app.chunks[0] == "<html><body>"

    def test_joined_output_has_all_sections(self, example_app) -> None:
        assert "Revenue: $1.2M" in example_app.output
        assert "Users: 45,000" in example_app.output
        assert "Churn: 2.1%" in example_app.output

    def test_output_has_title(self, example_app) -> None:
        assert "<h1>Quarterly Report</h1>" in example_app.output

    def test_sink_matches_stream(self, example_app) -> None:
        assert example_app.buffered == example_app.output

    def test_chunks_are_strings(self, example_app) -> None:
        for chunk in example_app.chunks:
            assert isinstance(chunk, str)
