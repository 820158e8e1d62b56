"""
Page Renderer

Holds the HTML template for the landing page. The template is parsed a
single time when this module is imported and never mutated afterwards.
"""

import time

from jinja2 import Environment, StrictUndefined

# Path of the proxy endpoint the page points its <img> at
IMAGE_ENDPOINT = "/image-from-api"

PAGE_HTML = """<!DOCTYPE html>
<html>
<head>
    <title>cat vibe checker</title>
    <style>
        body { font-family: sans-serif; text-align: center; }
        img { border: 1px solid #ccc; margin-top: 20px; }
    </style>
</head>
<body>
    <h1>This cat matches your vibe</h1>
    <h2>Not feeling it?</h2>
    <p>Refresh this page to try again</p>
    <!-- the t parameter keeps browsers from reusing a cached image URL -->
    <img src="{{ image_endpoint }}?t={{ timestamp }}" alt="Dynamic API Image" />
    <p><a href="/">Reload Page</a></p>
</body>
</html>
"""

_env = Environment(autoescape=True, undefined=StrictUndefined)
PAGE_TEMPLATE = _env.from_string(PAGE_HTML)


def new_cache_buster() -> str:
    """Current time in nanoseconds, as a decimal string."""
    return str(time.time_ns())


def render_page(timestamp: str) -> str:
    """
    Render the landing page.

    Raises:
        jinja2.TemplateError: if the template cannot be evaluated.
    """
    return PAGE_TEMPLATE.render(image_endpoint=IMAGE_ENDPOINT, timestamp=timestamp)
