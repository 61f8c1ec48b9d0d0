"""
Constants used across cycle tracking services.
"""
from period_tracker.models.record import FlowAmount, FlowColor, PainLevel, Symptom

# Gaps between period starts outside (MIN_CYCLE_GAP, MAX_CYCLE_GAP) are outliers
MIN_CYCLE_GAP = 0
MAX_CYCLE_GAP = 60

DEFAULT_CYCLE_LENGTH = 28
LUTEAL_PHASE_DAYS = 14

# Fertile window spans ovulation day - 5 through ovulation day + 4
FERTILE_DAYS_BEFORE_OVULATION = 5
FERTILE_DAYS_AFTER_OVULATION = 4

CALENDAR_CELLS = 42

REMINDER_HORIZON_DAYS = 2
UPCOMING_HORIZON_DAYS = 7

# Page tip thresholds
SHORT_CYCLE_DAYS = 21
LONG_CYCLE_DAYS = 35
NORMAL_CYCLE_RANGE = (28, 32)
NORMAL_DURATION_RANGE = (3, 7)
MIN_RECORDS_FOR_ACCURACY = 3
STALE_RECORD_DAYS = 40

MAX_ADVISORIES = 3
LONG_HEAVY_PERIOD_DAYS = 7

IRON_SUGGESTION = "Add iron-rich foods such as leafy greens, beans and red meat"

COLOR_ADVISORIES = {
    FlowColor.DARK_RED: {
        "concerns": ["Darker flow usually means older blood leaving slowly"],
        "suggestions": [IRON_SUGGESTION],
    },
    FlowColor.BROWN: {
        "concerns": ["Brown flow usually means older blood leaving slowly"],
        "suggestions": [IRON_SUGGESTION],
    },
    FlowColor.PINK: {
        "concerns": ["Pink, watery flow can point to low estrogen levels"],
    },
    FlowColor.BLACK: {
        "warnings": ["Black flow that persists should be checked by a doctor"],
    },
}

AMOUNT_ADVISORIES = {
    FlowAmount.HEAVY: {
        "concerns": ["Heavy flow can lower your iron levels"],
        "suggestions": [IRON_SUGGESTION],
    },
}

PAIN_ADVISORIES = {
    PainLevel.SEVERE: {
        "warnings": ["Severe pain is not normal, consider seeing a doctor"],
        "suggestions": ["Use a heating pad and rest as much as you can"],
    },
    PainLevel.MODERATE: {
        "suggestions": ["Gentle stretching and a warm bath can ease pain"],
    },
}

SYMPTOM_ADVISORIES = {
    Symptom.DIZZINESS: {
        "warnings": ["Dizziness during your period can be a sign of anemia"],
    },
    Symptom.CLOTS: {
        "concerns": ["Frequent large clots are worth mentioning to a doctor"],
    },
    Symptom.NAUSEA: {
        "concerns": ["Nausea may be linked to high prostaglandin levels"],
    },
    Symptom.CRAMPS: {
        "suggestions": ["Light exercise and warmth on the lower belly help with cramps"],
    },
    Symptom.HEADACHE: {
        "suggestions": ["Stay hydrated and keep a regular sleep schedule"],
    },
    Symptom.FATIGUE: {
        "suggestions": ["Prioritize rest and keep meals regular"],
    },
    Symptom.MOOD_SWINGS: {
        "suggestions": ["Plan calm activities and reduce caffeine"],
    },
    Symptom.BLOATING: {
        "suggestions": ["Cut back on salty foods and drink more water"],
    },
    Symptom.BACK_PAIN: {
        "suggestions": ["Try gentle yoga poses to relieve lower back pain"],
    },
}

LONG_HEAVY_PERIOD_WARNING = "Heavy flow lasting more than a week should be checked by a doctor"
