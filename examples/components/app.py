"""Reusable components -- capitalized tags, props and named slots.

A component is a template looked up by its tag name. Attributes become
props, the tag's content is ``$children``, and ``<Slot name="...">``
wrappers (or a ``slot="..."`` prop on a child component) fill
``$slots.<name>``.

Run:
    python app.py
"""

from motif import DictLoader, Environment

env = Environment(
    loader=DictLoader(
        {
            "page": (
                "<h1>{{ title }}</h1>\n"
                "{{#each features as feature}}"
                "<Card>"
                '<Slot name="header">{{ feature.name }}</Slot>'
                "{{ feature.desc }}"
                "</Card>\n"
                "{{/each}}"
                '<Alert level="warning"><Badge slot="icon" label="!"/>{{ warning_message }}</Alert>\n'
            ),
        },
        components={
            "Card": (
                '<div class="card">'
                "{{#if $slots.header}}<header>{{{ $slots.header }}}</header>{{/if}}"
                "<div class=\"body\">{{{ $slots.default }}}</div>"
                "</div>"
            ),
            "Alert": '<div class="alert alert-{{ level }}">{{{ $slots.icon }}} {{{ $slots.default }}}</div>',
            "Badge": "<b>{{ label }}</b>",
        },
    )
)

template = env.get_template("page")

output = template.render(
    title="Component Demo",
    features=[
        {"name": "Mixed syntax", "desc": "Mustache, ERB and components in one file"},
        {"name": "Async", "desc": "Helpers may be coroutines"},
        {"name": "Zero deps", "desc": "Pure Python, no dependencies"},
    ],
    warning_message="This is an alpha release. API may change.",
)


def main() -> None:
    print(output)
    print("Components used:", ", ".join(template.metadata.components))


if __name__ == "__main__":
    main()
