class Params:
    """
    All tunable knobs live here so you don't hunt through code.
    """
    def __init__(self):
        # Window / surface
        self.window_name = "Spring Bezier"
        self.width = 960
        self.height = 540
        self.background = (30, 24, 20)   # BGR

        # Spring physics (clamped again by SpringSimulator on assignment)
        self.spring_constant = 0.15      # k, [0.01, 0.5]
        self.damping = 0.88              # c, [0.7, 0.99]
        self.influence = 0.8             # how far the anchor moves toward the pointer per injection

        # Pointer interaction
        self.interaction_radius = 80.0   # px, strict "<" hit test

        # Curve sampling / drawing
        self.sample_density = 200        # polyline segments for the curve
        self.tangent_density = 8         # tangents drawn = density + 1
        self.tangent_length = 40.0       # px
        self.control_point_radius = 6    # px

        # Hand input (only used with --hands)
        self.camera_max_index = 6
        self.pinch_open_dist = 0.12
        self.pinch_on = 0.75
        self.pinch_off = 0.55

        # Alpha-beta smoothing for the fingertip pointer
        self.use_prediction = True
        self.pred_lead_sec = 1.0 / 60.0
        self.pred_alpha = 0.85
        self.pred_beta = 0.02
        self.pred_adaptive = True
