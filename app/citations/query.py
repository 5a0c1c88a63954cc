"""Free-text literature query built from a profile."""

from app.citations.types import Profile

QUERY_SEPARATOR = " + "


def build_search_query(profile: Profile) -> str:
    """Concatenate profile-derived search terms in a fixed order.

    Args:
        profile: Onboarding profile

    Returns:
        Query string with components joined by `` + ``; empty when the
        profile contributes nothing.
    """
    tokens: list[str] = []
    if profile.goal:
        tokens.append(profile.goal)
    if profile.activity_level:
        tokens.append(f"{profile.activity_level} training")
    if profile.injuries:
        tokens.append(" OR ".join(profile.injuries))
    if profile.conditions:
        tokens.append(" OR ".join(profile.conditions))
    if profile.medications:
        tokens.append("exercise safety medication interactions")
    if profile.smoking and profile.smoking != "never":
        tokens.append("smoking cardiometabolic risk intervention")
    if profile.alcohol and profile.alcohol != "never":
        tokens.append("alcohol recovery inflammation")
    if profile.time_available:
        tokens.append(f"{profile.time_available[0]} session duration")
    if profile.age:
        tokens.append(f"{profile.age} years old longevity training adaptations")

    return QUERY_SEPARATOR.join(token for token in tokens if token.strip())
