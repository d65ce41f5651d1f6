# =========================
# COLORS
# =========================
DEFAULT_START_COLOR       = (0.0, 1.0, 1.0)
DEFAULT_INTERACTION_COLOR = (0.0, 0.0, 1.0)

# =========================
# ANIMATION (milliseconds)
# =========================
FADE_DURATION_MS  = 200     # icon fade in/out and delay reset
FLASH_DURATION_MS = 200     # ring flash on click, out and back
ICON_OPACITY      = 0.75    # opacity of a shown action icon
RING_OPACITY      = 0.75

# =========================
# REGISTRY KEYS
# =========================
CURSOR_KEY   = "cursor"

# =========================
# HARDWARE CLICK
# =========================
BUTTON_PRIMARY   = 0        # left mouse / remote trigger
BUTTON_SECONDARY = 2        # right mouse / remote secondary
CLICK_LISTENER_EVENTS = ("mousedown",)

# =========================
# RENDERING
# =========================
RENDER_ORDER_ON_TOP  = 999
RENDER_ORDER_DEFAULT = 0

# =========================
# QT HOST
# =========================
TICK_INTERVAL_MS = 16       # ~60 fps
