"""Hello World -- the simplest motif example.

Parse a template from a string and render it with context variables.
No templates directory needed.

Run:
    python app.py
"""

from motif import Environment

env = Environment()

# Parse from string
template = env.from_string("Hello, {{ name }}!")

# Render with context
output = template.render(name="World")

# Both syntaxes work in one template
mixed = env.from_string("<%= greeting %>, {{ name }}!").render(greeting="Hi", name="motif")


def main() -> None:
    print(output)
    print(mixed)
    print()

    # Multiple renders with different context
    for name in ["Motif", "Async", "Python"]:
        print(template.render(name=name))


if __name__ == "__main__":
    main()
