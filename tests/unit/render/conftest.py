import pytest

from pagewright.render import set_render_functions


def container(args):
    tag = args.item_data.get("tag", "div")
    return f"<{tag}>", f"</{tag}>"


def text(args):
    return f"<p>{args.item_data.get('text', '')}</p>"


def layout(args):
    return f"<html><title>{args.meta['title']}</title><main>{args.content}</main></html>"


@pytest.fixture
def functions():
    return {"container": container, "text": text}


@pytest.fixture
def render_functions(render_context, functions):
    set_render_functions(functions, layout)
    return render_context.render_functions


@pytest.fixture
def layouts(render_context, functions):
    """Layout arguments recorded by a pass-through layout."""
    captured = []

    def capture(args):
        captured.append(args)
        return args.content

    set_render_functions(functions, capture)
    return captured
