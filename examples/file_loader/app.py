"""File-based templates -- the most common real-world pattern.

Loads pages, partials, components and layouts from disk with
FileSystemLoader. Each kind has its own directory under ``templates/``;
pages pick a layout in their frontmatter.

Run:
    python app.py
"""

from pathlib import Path

from motif import Environment, FileSystemLoader

templates_dir = Path(__file__).parent / "templates"
env = Environment(loader=FileSystemLoader(templates_dir), cache=True)

site = {
    "site_name": "My Site",
    "nav_items": [
        {"url": "/", "label": "Home"},
        {"url": "/about", "label": "About"},
    ],
}

# Render both pages
home_template = env.get_template("home")
about_template = env.get_template("about")

home_output = home_template.render(
    site,
    message="This is a motif-powered site with layouts and components.",
    features=[
        {"name": "Layouts", "summary": "Pages name a layout in frontmatter."},
        {"name": "Components", "summary": "Capitalized tags with slots."},
    ],
)

about_output = about_template.render(
    site,
    description="Built with motif, the async template engine.",
)


def main() -> None:
    print("=== Home Page ===")
    print(home_output)
    print()
    print("=== About Page ===")
    print(about_output)
    print()
    print(f"Cache: {env.template_cache.info()}")


if __name__ == "__main__":
    main()
