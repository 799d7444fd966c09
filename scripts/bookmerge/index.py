"""
Download page for the dist/ directory.

Lists every generated artifact for a book, grouped by release date
(newest first). Artifacts are named `<prefix>-<YYYY-MM-DD>.<variant>`.
"""

import os
import re

from jinja2 import Environment, select_autoescape


INDEX_TEMPLATE = """\
<!DOCTYPE html>
<html lang="{{ lang }}">
<head>
    <meta charset="UTF-8">
    <title>Download '{{ title }}'</title>
    <style>
        body { max-width: 32em; margin: 10em auto; font-size: 16px; font-family: sans-serif; line-height: 1.3; }
        li { margin-bottom: 0.5em; }
    </style>
</head>
<body>
    <h1>{{ title }}</h1>
    <ul>
{%- for release in releases %}
        <li>
            <h2>{{ release.date }}</h2>
            <ul>
{%- for file in release.files %}
                <li><a href="{{ file.name }}">{{ file.label }}</a></li>
{%- endfor %}
            </ul>
        </li>
{%- endfor %}
    </ul>
</body>
</html>
"""

RELEASE_DATE = re.compile(r"^(\d{4}-\d{2}-\d{2})(.*)$")

_env = Environment(autoescape=select_autoescape(default=True, default_for_string=True))


def artifact_label(variant):
    """`.a4.pdf` → `A4 PDF`, `.epub` → `EPUB`."""
    return variant.upper().replace("-", "").replace(".", " ").strip()


def list_releases(dist_dir, prefix):
    """
    Group artifacts in dist_dir by release date.

    Returns [{"date": ..., "files": [{"name", "label"}, ...]}, ...],
    newest release first.
    """
    releases = {}
    lead = f"{prefix}-"

    for name in sorted(os.listdir(dist_dir)):
        if not name.startswith(lead):
            continue
        match = RELEASE_DATE.match(name[len(lead):])
        if not match:
            continue
        date, variant = match.groups()
        releases.setdefault(date, []).append({
            "name": name,
            "label": artifact_label(variant) or name,
        })

    return [
        {"date": date, "files": releases[date]}
        for date in sorted(releases, reverse=True)
    ]


def render_index(dist_dir, config):
    template = _env.from_string(INDEX_TEMPLATE)
    return template.render(
        title=config.title,
        lang=config.lang,
        releases=list_releases(dist_dir, config.prefix),
    )
