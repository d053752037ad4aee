"""Admin dashboard — served by the live app only."""

ignore = True


async def get(request):
    return "<h1>Admin</h1>"
