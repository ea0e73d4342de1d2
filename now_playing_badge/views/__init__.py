"""Badge views"""

from now_playing_badge.views.badge_renderer import render_badge, render_default_badge

__all__ = ["render_badge", "render_default_badge"]
