"""Streaming rendering -- chunked output as the template is walked.

``Template.render_stream_async()`` yields HTML chunks in document order,
so a response can start before slow helpers finish. ``stream_to()``
writes the same chunks to any sink: a file, a socket writer, or a
callable.

Run:
    python app.py
"""

import asyncio
import io

from motif import DictLoader, Environment

env = Environment(
    loader=DictLoader(
        {
            "report": (
                "---\nlayout: shell\n---\n"
                "<h1>{{ title }}</h1>\n"
                "{{#each sections as section}}"
                '<div class="metric {{ section.trend }}">{{ section.name }}: {{ lookup section.name }}</div>\n'
                "{{/each}}"
            ),
        },
        layouts={"shell": "<html><body>{{{ content }}}</body></html>"},
    )
)

METRICS = {"Revenue": "$1.2M", "Users": "45,000", "Churn": "2.1%"}


async def lookup(name: str) -> str:
    """Pretend to fetch a metric from a slow backend."""
    await asyncio.sleep(0.01)
    return METRICS[name]


env.register_helper("lookup", lookup)

template = env.get_template("report")

context = {
    "title": "Quarterly Report",
    "sections": [
        {"name": "Revenue", "trend": "up"},
        {"name": "Users", "trend": "up"},
        {"name": "Churn", "trend": "down"},
    ],
}


async def collect() -> list[str]:
    return [chunk async for chunk in template.render_stream_async(context)]


async def write_to_buffer() -> str:
    buffer = io.StringIO()
    await template.stream_to(buffer, context)
    return buffer.getvalue()


# Collect chunks for testing
chunks = asyncio.run(collect())
output = "".join(chunks)
buffered = asyncio.run(write_to_buffer())


def main() -> None:
    print(f"Streaming {len(chunks)} chunks:\n")
    for i, chunk in enumerate(chunks):
        print(f"[chunk {i}] {chunk!r}")
    print(f"\n--- Full output ({len(chunks)} chunks) ---\n")
    print(output)


if __name__ == "__main__":
    main()
