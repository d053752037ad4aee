"""A single post — parameterized, so only built when the home page links it."""

path = "/blog/{slug}"


async def get(request, slug):
    return f"<html><body><h1>{slug.replace('-', ' ').title()}</h1></body></html>"
