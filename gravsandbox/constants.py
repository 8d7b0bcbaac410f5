import math

# Engine defaults (simplified game units, not SI)
G_DEFAULT = 800.0
SOFTENING_DEFAULT = 8.0
SUBSTEPS_DEFAULT = 6
MAX_FRAME_DT = 0.05  # seconds; larger frame deltas are clamped
DEFAULT_TIME_SCALE = 2.0

# Collisions
MERGE_DISTANCE_FACTOR = 0.6  # bodies merge below this fraction of r_a + r_b
STAR_PROMOTION_MASS = 2000.0

# Trails
MAX_TRAIL_LENGTH = 200

# Preset mass/radius per body type
BODY_TYPES = {
    "star": {"mass": 3000.0, "radius": 22.0},
    "planet": {"mass": 400.0, "radius": 10.0},
    "moon": {"mass": 30.0, "radius": 5.0},
}

# Fill color, glow rgba and a trail template where ALPHA is filled in at render time
PALETTES = {
    "star": [
        ("#ffb347", "rgba(255,179,71,0.4)", "rgba(255,179,71,ALPHA)"),
        ("#ffe066", "rgba(255,224,102,0.4)", "rgba(255,224,102,ALPHA)"),
        ("#ff6b6b", "rgba(255,107,107,0.4)", "rgba(255,107,107,ALPHA)"),
        ("#c4b5fd", "rgba(196,181,253,0.4)", "rgba(196,181,253,ALPHA)"),
    ],
    "planet": [
        ("#4e8cff", "rgba(78,140,255,0.35)", "rgba(78,140,255,ALPHA)"),
        ("#9b6dff", "rgba(155,109,255,0.35)", "rgba(155,109,255,ALPHA)"),
        ("#42d4ff", "rgba(66,212,255,0.35)", "rgba(66,212,255,ALPHA)"),
        ("#ff5ea0", "rgba(255,94,160,0.35)", "rgba(255,94,160,ALPHA)"),
        ("#50e89e", "rgba(80,232,158,0.35)", "rgba(80,232,158,ALPHA)"),
        ("#ff8c42", "rgba(255,140,66,0.35)", "rgba(255,140,66,ALPHA)"),
    ],
    "moon": [
        ("#a0a8c0", "rgba(160,168,192,0.3)", "rgba(160,168,192,ALPHA)"),
        ("#d4c5a9", "rgba(212,197,169,0.3)", "rgba(212,197,169,ALPHA)"),
    ],
}

# Drag-to-launch tuning
DRAG_VELOCITY_SCALE = 0.04
MAX_LAUNCH_SPEED = 150.0

# Demo scene: (type, orbital radius, angle in radians) around a central star
DEMO_ORBITS = [
    ("planet", 120.0, 0.0),
    ("planet", 200.0, math.pi * 0.7),
    ("planet", 310.0, math.pi * 1.3),
    ("moon", 420.0, math.pi * 0.3),
]
