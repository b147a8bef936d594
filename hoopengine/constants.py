"""Court layout and physical constants for the hoop toss.

All values in screen units: pixels for distances, pixels/frame for velocities.
The y axis grows downward, so gravity is positive.
"""

# Integration
GRAVITY = 0.35  # added to vy every frame
AIR_RESISTANCE = 0.995  # vx multiplier per frame, vy is undamped
BOUNCE = 0.75  # velocity retained after backboard or rim contact

# Ball
BALL_RADIUS = 24
RACK_X = 100  # rest position, measured from the left edge
RACK_OFFSET_Y = 150  # rest position, measured up from the bottom edge

# Hoop: rim sits at 35% of the viewport height, backboard flush right
RIM_WIDTH = 85
RIM_THICKNESS = 10
RIM_HEIGHT_RATIO = 0.35
RIM_GAP = 5  # between rim's right end and the backboard face
RIM_KICK = 1.5  # outward speed added along the normal after a rim hit
CONTACT_CLEARANCE = 2  # extra spacing when pushing the ball out of contact

BACKBOARD_WIDTH = 12
BACKBOARD_HEIGHT = 140
BACKBOARD_RISE = 110  # backboard top above the rim

# Scoring: ball centre within this many px of rim height counts as a swish
SWISH_WINDOW = 15

# Throwing
THROW_SCALE = 0.14  # drag px -> launch px/frame
SPIN_SCALE = 0.05  # rotation speed per unit of vx
MIN_THROW_SPEED = 2  # |vx| + |vy| must exceed this to launch
GRAB_RADIUS = 100  # pointer must land this close to the ball to start a drag

# Bounds
OUT_OF_BOUNDS_MARGIN = 100  # px past the viewport edge before the turn ends

# Trajectory guide
PREDICTION_STEPS = 25

# Floor line drawn this far above the bottom edge
FLOOR_OFFSET = 80
