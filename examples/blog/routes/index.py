"""Home page — lists every post and registers each one for the build."""

import pawprint


_BASE = "https://blog.example.com"
_POSTS = {
    "hello-world": "Hello, world",
    "static-builds": "Why static builds",
}


async def get(request):
    items = []
    for slug, title in _POSTS.items():
        pawprint.discover(f"{_BASE}/blog/{slug}")
        items.append(f'<li><a href="/blog/{slug}">{title}</a></li>')
    return (
        '<html><head><link rel="stylesheet" href="/static/style.css"></head>'
        f"<body><h1>Blog</h1><ul>{''.join(items)}</ul></body></html>"
    )
