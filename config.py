"""
Configurable ideal ranges, penalty slopes and weights for PSL scoring.
Tune these without touching the main logic.
"""

# --- Score scale ---
SCORE_MIN = 1.0
SCORE_MAX = 10.0

# --- Proportion targets (ideal bands) ---
MIDFACE_RATIO_RANGE = (0.9, 1.1)
FWHR_RANGE = (1.9, 2.2)
FWHR_CENTER = 2.05
GONIAL_ANGLE_RANGE = (115.0, 130.0)  # degrees
IPD_RATIO_RANGE = (0.42, 0.46)       # IPD / bizygomatic width
IPD_RATIO_CENTER = 0.44
CHEEKBONE_RATIO_RANGE = (1.05, 1.20)  # bizygomatic width / jaw width
CHEEKBONE_RATIO_CENTER = 1.12

# --- Canthal tilt (degrees, outer corner higher = positive) ---
CANTHAL_TILT_RANGE = (4.0, 10.0)
CANTHAL_TILT_CENTER = 7.0
CANTHAL_TILT_POSITIVE_DEG = 5.0   # category "positive" above this
CANTHAL_TILT_NEGATIVE_DEG = -3.0  # category "negative" below this; also the steep-penalty knee

# --- Penalty slopes (score points per unit outside the band) ---
IPD_PENALTY_SLOPE = 30.0
FWHR_PENALTY_SLOPE = 8.0
GONIAL_LOW_PENALTY_SLOPE = 0.3
GONIAL_HIGH_PENALTY_SLOPE = 0.4
CHEEKBONE_LOW_PENALTY_SLOPE = 40.0
CHEEKBONE_HIGH_PENALTY_SLOPE = 20.0
CHEEKBONE_NO_JAW_SCORE = 5.0
IDEAL_RANGE_WORST_DEVIATION = 0.5  # generic helper: distance at which score bottoms out

# --- Brow ridge ---
BROW_RIDGE_NORMALIZER = 30.0  # brow-to-pupil distance mapping to prominence 1.0

# --- Body ---
BMI_RANGE_MALE = (22.0, 25.0)
BMI_RANGE_FEMALE = (19.0, 23.0)
BMI_PENALTY_SCALE = 5.0
BMI_PENALTY_EXPONENT = 1.5
BMI_PENALTY_FACTOR = 4.0
BMI_UNDERWEIGHT = 18.5
BMI_OVERWEIGHT = 25.0
BMI_OBESE = 30.0
WAIST_TO_SHOULDER_MALE = 0.60    # V-taper
WAIST_TO_SHOULDER_FEMALE = 0.70
WAIST_TO_SHOULDER_PENALTY_SLOPE = 15.0
WAIST_TO_SHOULDER_REWARD_SLOPE = 10.0

# Skin texture has no model behind it yet; every scan gets this score
SKIN_TEXTURE_DEFAULT = 7.0

# --- Intra-region weights (must sum to 1.0 per region) ---
WEIGHT_EYE_CANTHAL = 0.50
WEIGHT_EYE_IPD = 0.25
WEIGHT_EYE_BROW = 0.25

WEIGHT_BONE_FWHR = 0.35
WEIGHT_BONE_GONIAL = 0.35
WEIGHT_BONE_CHEEKBONE = 0.30

WEIGHT_SYM_EYE = 0.40
WEIGHT_SYM_JAW = 0.30
WEIGHT_SYM_OVERALL = 0.30

WEIGHT_BODY_BMI = 0.40
WEIGHT_BODY_WAIST = 0.35
WEIGHT_BODY_SKIN = 0.25

# --- Overall weights (must sum to 1.0) ---
WEIGHT_EYE_AREA = 0.30
WEIGHT_BONE_STRUCTURE = 0.30
WEIGHT_SYMMETRY = 0.20
WEIGHT_SOFTMAX = 0.20

# --- Potential max projection ---
POTENTIAL_BMI_TARGET = 9.5
POTENTIAL_SKIN_TARGET = 9.0
POTENTIAL_MAX_CAP = 9.5

# --- Symmetry (exp(-k * average variance)) ---
SYMMETRY_DECAY = 10.0

# --- Recommendation thresholds (sub-score below this triggers the rule) ---
REC_CANTHAL_TILT_BELOW = 6.0
REC_BROW_RIDGE_BELOW = 6.0
REC_JAW_BELOW = 7.0          # gonial angle or FWHR
REC_CHEEKBONE_BELOW = 7.0
REC_BMI_BELOW = 7.0
REC_WAIST_BELOW = 7.0
REC_SKIN_BELOW = 8.0

# --- Score tiers (upper bounds, exclusive) ---
TIER_BELOW_AVERAGE = 3.0
TIER_AVERAGE = 5.0
TIER_ABOVE_AVERAGE = 7.0
TIER_ATTRACTIVE = 8.5

# --- Routine catalog ---
CATALOG_FILENAME = "routines.json"
CATALOG_VERSION = 1
