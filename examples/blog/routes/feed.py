"""RSS feed — written as feed.xml, kept out of the sitemap."""

from chirp import Response

path = "/feed.xml"
sitemap = False


async def get(request):
    return Response(
        body='<?xml version="1.0"?><rss version="2.0"><channel></channel></rss>',
        content_type="application/rss+xml",
    )
