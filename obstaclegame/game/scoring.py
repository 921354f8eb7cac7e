"""Score calculation."""

SCORE_BOOSTER_MULTIPLIER = 1.5


def score(removed_count: int) -> int:
    """Score for one tap: the square of the number of cells actually removed."""
    return removed_count * removed_count


class ScoreTracker:
    """Running score for one stage, with the optional score booster."""

    def __init__(self):
        self.total = 0
        self.booster_active = False

    def activate_booster(self):
        self.booster_active = True

    def add(self, removed_count: int) -> int:
        """Record a tap and return the score it earned."""
        earned = score(removed_count)
        if self.booster_active:
            earned = round(earned * SCORE_BOOSTER_MULTIPLIER)
        self.total += earned
        return earned

    def reset(self):
        self.total = 0
        self.booster_active = False
