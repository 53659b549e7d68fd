"""Static vocabularies, tables and defaults for handball clip analysis."""

from __future__ import annotations

GEMINI_API_BASE = "https://generativelanguage.googleapis.com/v1beta"
DEFAULT_MODEL = "gemini-2.0-flash"

ACTION_LABELS = (
    "passing",
    "feint",
    "footwork",
    "shooting",
    "defense",
    "goalkeeper",
    "drill",
    "throwing",
)

SKILL_LEVELS = ("beginner", "intermediate", "advanced")
LEVEL_ORDER = {level: index for index, level in enumerate(SKILL_LEVELS)}

MAX_TAGS = 3
MAX_ACTIONS = 3
MAX_FRAMES = 3
MAX_EXERCISES = 3
DEFAULT_SENTENCES = 3
DEFAULT_ACTION_CONFIDENCE = 0.5

# Rejection fires only for a confident "not handball" verdict.
DEFAULT_CLASSIFIER_CONFIDENCE = 0.7
REJECTION_THRESHOLD = 0.8
REJECTION_MESSAGE = (
    "The uploaded video does not appear to be related to handball. "
    "Please upload a handball training or match clip."
)

DEFAULT_DELAY_MS = (2000, 4000)

# None means the action carries no skill tag.
ACTION_TO_TAG = {
    "passing": "passing",
    "feint": "feint",
    "footwork": "footwork",
    "shooting": "shooting",
    "defense": "defense",
    "throwing": "throwing",
    "goalkeeper": "defense",
    "drill": None,
}

FILENAME_TAG_CANDIDATES = (
    "passing",
    "feint",
    "footwork",
    "shooting",
    "defense",
    "throwing",
    "drill",
)

FILENAME_LEVEL_PATTERNS = (
    ("beginner", r"(^|[^a-z])(beg|beginner|u9|u10|u11|u12)([^a-z]|$)"),
    ("intermediate", r"(^|[^a-z])(int|intermediate|u13|u14|u15)([^a-z]|$)"),
    ("advanced", r"(^|[^a-z])(adv|advanced|u16|u17|u18|u19)([^a-z]|$)"),
)

FOCUS_AREA_LABELS = {
    "passing": "Passing",
    "throwing": "Throwing",
    "footwork": "Footwork",
    "shooting": "Shooting",
    "defense": "Defense",
    "feint": "Feints",
}

FUNDAMENTALS_TAGS = ("passing", "footwork", "ball-handling", "drill")
FUNDAMENTALS = "fundamentals"

FEEDBACK_PHRASES = {
    "passing": {
        "good": (
            "Hands are ready and your release is steady; timing looks controlled.",
            "You stay balanced through the pass which keeps trajectory predictable.",
        ),
        "improve": (
            "Snap the wrist and step through the pass to drive accuracy and pace.",
            "Add a clear target and finish the pass with fingers pointing to the receiver.",
        ),
    },
    "throwing": {
        "good": (
            "Arm path is compact with a clean wrist snap through release.",
            "You sequence hips, torso and arm well which preserves efficiency.",
        ),
        "improve": (
            "Lead with the elbow and rotate the trunk to add power without forcing the shoulder.",
            "Plant the front foot firmly and keep the head stable through release.",
        ),
    },
    "footwork": {
        "good": (
            "Light feet and a stable base help you stay balanced.",
            "You keep short steps and active hips which support quick changes of direction.",
        ),
        "improve": (
            "Lower the hips and clean up plant-foot timing to change direction faster.",
            "Keep the chest tall and avoid crossing the feet under pressure.",
        ),
    },
    "shooting": {
        "good": (
            "Arm speed is promising and you finish with a clear follow-through.",
            "Your plant step is consistent which supports repeatable mechanics.",
        ),
        "improve": (
            "Align the elbow and sync jump timing for more power and control.",
            "Focus the eyes on a small target and hold the follow-through for a beat.",
        ),
    },
    "defense": {
        "good": (
            "Solid stance with active shuffle keeps you in front of the attacker.",
            "You angle the body well to show the attacker away from the middle.",
        ),
        "improve": (
            "Manage distance and keep the hands active without fouling.",
            "React with the feet first and block with the chest, not the arms.",
        ),
    },
    "feint": {
        "good": (
            "You sell the initial move and commit to the direction change.",
            "Body lean and ball protection are coordinated which keeps the move safe.",
        ),
        "improve": (
            "Explode off the first step and use the eyes to disguise the intention.",
            "Set up the feint with a clear tempo change to unbalance the defender.",
        ),
    },
    "fundamentals": {
        "good": (
            "Consistent effort and clear intent through the action.",
            "Control of balance and ball placement is improving steadily.",
        ),
        "improve": (
            "Tidy up alignment and timing for better efficiency and control.",
            "Keep movements compact and repeatable before adding speed.",
        ),
    },
}

CLASSIFIER_PROMPT = """You are a handball coach analyzing short video frames. Focus on player movement mechanics (body position, footwork, timing, ball control, follow-through, throwing mechanics).
Tasks:
1) Decide if the scene is handball (court markings, goals, ball, or players doing handball actions).
2) Identify the primary action(s) observed from this set (use these exact labels): [passing, feint, footwork, shooting, defense, goalkeeper, drill, throwing].
3) Estimate the skill level: one of [beginner, intermediate, advanced].
4) Provide exactly 3 concise positives and exactly 3 concise improvements. One sentence each.
5) If handball, also include up to 2-3 skill tags from [passing, feint, footwork, shooting, defense, throwing].
Return STRICT JSON only:
{
  "isHandball": boolean,
  "confidence": number,
  "level": "beginner|intermediate|advanced",
  "actions": [{ "label": "passing|feint|footwork|shooting|defense|goalkeeper|drill|throwing", "confidence": number }],
  "tags": string[],
  "positives": string[],
  "improvements": string[]
}"""
