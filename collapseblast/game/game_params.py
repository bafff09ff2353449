# View constants
# Board dimensions and color count live in GameConfig
COLORS = [
    (252, 15, 15),  # Red
    (17, 181, 11),  # Green
    (11, 51, 181),  # Blue
    (252, 197, 15),  # Yellow
    (122, 11, 181),  # Magenta
    (15, 190, 200),  # Cyan
]
EMPTY_COLOR = (255, 255, 255)  # White
BACKGROUND_COLOR = (40, 40, 40)

# Marker drawn on top of a tile for each display tier above the default
TIER_MARKERS = ["", "A", "B", "C"]

TILE_SIZE = 50  # Size of each square tile
GAP = 30  # Margin around the field
