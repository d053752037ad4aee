"""Contact form handler — POST only, never part of the static build."""


async def post(request):
    return "Thanks!"
