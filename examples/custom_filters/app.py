"""Custom helpers and filters -- extending motif with your own functions.

Helpers are called by name with space-separated arguments
(``{{ money total "€" }}``); filters receive the piped value first
(``{{ total | money "€" }}``). Either may return ``Markup`` to skip
escaping, or a coroutine to be awaited.

Run:
    python app.py
"""

from motif import DictLoader, Environment, Markup, html_escape


def money(amount: float, currency: str = "$") -> str:
    """Format amount as currency."""
    return f"{currency}{amount:,.2f}"


def pluralize(n: int, singular: str, plural: str) -> str:
    """Return singular or plural form based on count."""
    return singular if n == 1 else plural


def is_prime(n: int) -> bool:
    if n < 2:
        return False
    return all(n % i for i in range(2, int(n**0.5) + 1))


def highlight(text: str) -> Markup:
    return Markup(f"<mark>{html_escape(text)}</mark>")


env = Environment(
    loader=DictLoader(
        {
            "cart": (
                "<h1>{{ highlight title }}</h1>\n"
                "{{#each items}}"
                "<li>{{ name }}: {{ price | money }} x {{ qty }} = {{ line_total this | money }}</li>\n"
                "{{/each}}"
                "<p>{{ count }} {{ pluralize count 'item' 'items' }}, "
                "total {{ total | money }} / {{ money total '€' }}</p>\n"
                "{{#if prime}}<p>Item count is prime</p>{{/if}}\n"
            ),
        }
    ),
    filters={"money": money},
)
env.register_helper("pluralize", pluralize)
env.register_helper("highlight", highlight)
env.register_helper("line_total", lambda item: item["price"] * item["qty"])

items = [
    {"name": "Widget", "price": 19.99, "qty": 2},
    {"name": "Gadget", "price": 5.0, "qty": 1},
    {"name": "Gizmo", "price": 1189.58, "qty": 1},
]
total = sum(item["price"] * item["qty"] for item in items)

output = env.get_template("cart").render(
    title="Your <cart>",
    items=items,
    count=len(items),
    total=total,
    prime=is_prime(len(items)),
)


def main() -> None:
    print(output)


if __name__ == "__main__":
    main()
