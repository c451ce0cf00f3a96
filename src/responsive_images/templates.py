"""Standalone page templates for rendered documents."""

from pathlib import Path

from jinja2 import ChoiceLoader, Environment, FileSystemLoader, PackageLoader

DEFAULT_TEMPLATE = "page.html"


def get_template_loader(templates_dir: Path | None = None) -> ChoiceLoader:
    """Get a Jinja2 template loader with override support.

    Template resolution order:
    1. User templates in templates_dir, if given and present
    2. Bundled default templates
    """
    loaders = []

    if templates_dir is not None and templates_dir.exists():
        loaders.append(FileSystemLoader(str(templates_dir)))

    loaders.append(PackageLoader("responsive_images", "defaults/templates"))

    return ChoiceLoader(loaders)


def render_page(
    body: str,
    title: str = "",
    templates_dir: Path | None = None,
    template_name: str = DEFAULT_TEMPLATE,
) -> str:
    """Wrap rendered HTML in a complete page.

    Args:
        body: Rendered document HTML
        title: Page title, escaped by the template
        templates_dir: Optional directory with template overrides
        template_name: Template to render

    Returns:
        Full HTML document
    """
    env = Environment(loader=get_template_loader(templates_dir))
    template = env.get_template(template_name)
    return template.render(body=body, title=title)
