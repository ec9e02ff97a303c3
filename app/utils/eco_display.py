from typing import Optional

from app.db.schema import EcoLetter


NOT_AVAILABLE = "N/A"

LETTER_COLORS = {
    EcoLetter.A: "green",
    EcoLetter.B: "lime",
    EcoLetter.C: "amber",
    EcoLetter.D: "orange",
    EcoLetter.E: "red",
}


def format_eco_score(score: Optional[float]) -> str:
    """
    Renders the score the way product cards show it, e.g. '72/100'.
    Decimals are truncated. Unscored products show 'N/A'.
    """
    if score is None or score < 0:
        return NOT_AVAILABLE
    return f"{int(score)}/100"


def letter_color(letter: Optional[EcoLetter]) -> Optional[str]:
    if letter is None:
        return None
    return LETTER_COLORS.get(EcoLetter(letter))
