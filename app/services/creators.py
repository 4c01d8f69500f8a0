from __future__ import annotations

from app.schemas.search import Creator

# Seed catalogue until creators are backed by the listings database.
CREATORS: tuple[Creator, ...] = (
    Creator(
        id="1",
        name="Aaron Amick",
        description="Creating Detailed Briefings of Submarines and more!",
        avatar="/avatars/aaron-amick.jpg",
        verified=True,
        follower_count=15420,
    ),
    Creator(
        id="2",
        name="Pamela Aaralyn",
        description="Creating Group Channelings, Classes, Live Q and A, Music, Writing",
        avatar="/avatars/pamela-aaralyn.jpg",
        verified=False,
        follower_count=8230,
    ),
    Creator(id="3", name="Aaron Mahnke", description="creating Lore", verified=True, follower_count=45600),
    Creator(id="4", name="Aaron and Jo", description="creating videos and music", follower_count=1250),
    Creator(
        id="5",
        name="Aaron Feng",
        description="creating Waifu2x-Extension-GUI for enhance Video, Image and GIF",
        follower_count=892,
    ),
)


def _matches(creator: Creator, needle: str) -> bool:
    return needle in creator.name.lower() or needle in creator.description.lower()


def search_creators(
    query: str,
    *,
    page: int = 1,
    limit: int = 10,
    catalogue: tuple[Creator, ...] | list[Creator] = CREATORS,
) -> tuple[list[Creator], int]:
    """Return one page of creators matching ``query`` and the total match count.

    Matching is a case-insensitive substring test on name and description.
    """
    needle = (query or "").strip().lower()
    matched = [c for c in catalogue if _matches(c, needle)]
    start = (max(page, 1) - 1) * limit
    return matched[start : start + limit], len(matched)
