"""
Fixed template text for the evaluation report.

Headings, boilerplate, placeholders and the static reference-chart data.
Everything record-specific comes from ``EvaluationRecord``; when a record
field is empty the matching placeholder below is rendered instead.
"""

from __future__ import annotations

CONFIDENTIAL_NOTICE = "CONFIDENTIAL INFORMATION ENCLOSED"

# ──────────────────────────────────────────────────────────────────
# PLACEHOLDERS
# ──────────────────────────────────────────────────────────────────

IMAGE_PLACEHOLDER = "[Image Placeholder]"
DIAGRAM_PLACEHOLDER = "[Body Diagram Placeholder]"
PHOTO_PLACEHOLDER = "[Photo Placeholder]"
IMAGE_MISSING = "[Image Missing]"
NO_IMAGES = "No images found."
NO_ANSWER = "No answer provided."
NO_INJURY_HISTORY = "No injury history was reported."
NO_REFERRAL_QUESTIONS = "No referral questions were submitted for this evaluation."
NO_CONCLUSIONS = "No conclusions have been recorded for this evaluation."
NO_TESTS = "No tests were selected for this evaluation."
NOT_AVAILABLE = "N/A"

# ──────────────────────────────────────────────────────────────────
# TABLE OF CONTENTS
# ──────────────────────────────────────────────────────────────────

CONTENTS_HEADING = "Contents of Report:"

# (text, indent level)
CONTENTS_OUTLINE: list[tuple[str, int]] = [
    ("Client Information", 0),
    ("Mechanism and History of Injury", 0),
    ("Pain & Symptom Illustration", 0),
    ("Referral Questions", 0),
    ("Conclusions", 0),
    ("Functional Abilities Determination and Job Match Results", 0),
    ("Test Data:", 0),
    ("◦ Activity Overview", 1),
    ("◦ Extremity Strength", 1),
    ("◦ Occupational Tasks", 1),
    ("◦ Range of Motion (Spine)", 1),
    ("◦ Whole Body Strength", 1),
    ("Appendix One: Reference Charts", 0),
    ("Appendix Two: Digital Library", 0),
]

# ──────────────────────────────────────────────────────────────────
# CLIENT INFORMATION
# ──────────────────────────────────────────────────────────────────

CLIENT_INFO_HEADING = "Client Information"
MECHANISM_HEADING = "Mechanism and History of Injury"
PAIN_HEADING = "Pain & Symptom Illustration"

# Legend rows: section headers are plain strings flagged True.
PAIN_LEGEND: list[tuple[str, bool]] = [
    ("Area of Primary Concern", True),
    ("P1    Primary", False),
    ("P2    Secondary", False),
    ("Pain Indicator", True),
    ("~    Primary", False),
    ("/    Shooting", False),
    ("x    Burning", False),
    ("•    Pins and Needles", False),
    ("o    Numbness", False),
    ("General", True),
    ("T    Temperature", False),
    ("SW   Swelling", False),
    ("S    Scar", False),
    ("C    Crepitus", False),
]

# Marker type (as placed on the body diagram) → legend symbol.
PAIN_SYMBOLS = {
    "primary-concern": "P1",
    "secondary-concern": "P2",
    "dull-ache": "~",
    "shooting": "/",
    "burning": "x",
    "pins-and-needles": "•",
    "numbness": "o",
    "temperature": "T",
    "swelling": "SW",
    "scar": "S",
    "crepitus": "C",
}

# ──────────────────────────────────────────────────────────────────
# REFERRAL QUESTIONS / CONCLUSIONS
# ──────────────────────────────────────────────────────────────────

REFERRAL_HEADING = "Referral Questions"
MEASUREMENT_HEADERS = ["Area Evaluated:", "Data:", "Valid?", "Norm:", "% of Norm:"]
PDC_CHART_REFERENCE = "*Scroll down to view the Physical Demand Classification Chart."

CONCLUSIONS_HEADING = "Conclusions"
SIGNATURE_HEADING = "Signature of Evaluator"
SIGNATURE_RULE = "___________________________"

PDC_LEVELS: dict[str, tuple[str, str]] = {
    "Sedentary": (
        "(S) Sedentary Work",
        "Exerting up to 10 lbs of force occasionally and/or a negligible amount of "
        "force frequently to lift, carry, push, pull, or otherwise move objects, "
        "including the human body. Sedentary work involves sitting most of the time "
        "but may involve walking or standing for brief periods of time. Jobs are "
        "sedentary if walking and standing are required occasionally and all other "
        "sedentary criteria are met.",
    ),
    "Light": (
        "(L) Light Work",
        "Exerting up to 20 lb of force occasionally, and/or up to 10 lb of force "
        "frequently, and/or a negligible amount of force constantly to move objects. "
        "Physical demand requirements are in excess of those for sedentary work. Even "
        "though the weight lifted may be only negligible, a job should be rated "
        "'Light Work': (1) when it requires walking or standing to a significant "
        "degree; or (2) when it requires sitting most of the time but entails pushing "
        "and/or pulling of arm or leg controls; and/or (3) when the job requires "
        "working at a production rate pace entailing the constant pushing and/or "
        "pulling of materials even though the weight of those materials is negligible.",
    ),
    "Medium": (
        "(M) Medium Work",
        "Exerting 20 to 50 lbs of force occasionally, and/or 10 to 25 lbs of force "
        "frequently, and/or greater than negligible up to 10 lbs of force constantly "
        "to move objects. Physical demand requirements are in excess of those for "
        "light work.",
    ),
    "Heavy": (
        "(H) Heavy Work",
        "Exerting 50 to 100 lbs of force occasionally, and/or 25 to 50 lbs of force "
        "frequently, and/or 10 to 20 lbs of force constantly to move objects. Physical "
        "demand requirements are in excess of those for medium work.",
    ),
    "Very Heavy": (
        "(VH) Very Heavy Work",
        "Exerting over 100 lbs of force occasionally, over 50 lbs of force "
        "frequently, or over 20 lbs of force constantly to move objects. Physical "
        "demand requirements are in excess of those for heavy work.",
    ),
}

# ──────────────────────────────────────────────────────────────────
# TEST RESULTS
# ──────────────────────────────────────────────────────────────────

RESULTS_HEADING = "Functional Abilities Determination and Job Match Results"
RESULTS_SUBHEADING = "Test Results:"
RESULTS_HEADERS = [
    "Activity Tested", "Date/Time", "Test Results", "Sit Time", "Stand Time",
    "Job Demands", "Job Match",
]
RESULTS_LEGEND = (
    "L=Left, R=Right, F=Flexion, E=Extension, %IS=% Industrial Standard, "
    "JD=Job Demands, JM=Job Match"
)
CONSISTENCY_HEADING = "Consistency Overview"
CONSISTENCY_HEADERS = ["Test", "Left Avg", "Left CV %", "Right Avg", "Right CV %", "Bilateral Deficiency %"]

# ──────────────────────────────────────────────────────────────────
# APPENDIX ONE: REFERENCE CHARTS
# ──────────────────────────────────────────────────────────────────

APPENDIX_ONE_HEADING = "Appendix One: Reference Charts"

RPE_HEADING = "Perceived Exertion and Pain Scales"
RPE_HEADERS = [
    "Perceived Exertion", "Rating (RPE)", "Minimal Heart Rate",
    "Mean Heart Rate", "Maximal Heart Rate",
]
RPE_ROWS = [
    ["no exertion at all", "6", "69", "77", "91"],
    ["extremely light", "7", "76", "85", "101"],
    ["", "8", "83", "93", "111"],
    ["very light", "9", "89", "101", "122"],
    ["", "10", "96", "110", "132"],
    ["light", "11", "103", "118", "142"],
    ["", "12", "110", "126", "153"],
    ["somewhat hard", "13", "116", "135", "163"],
    ["", "14", "123", "143", "173"],
    ["hard (heavy)", "15", "130", "151", "184"],
    ["", "16", "137", "159", "194"],
    ["very hard", "17", "143", "168", "204"],
    ["", "18", "150", "176", "215"],
    ["extremely hard", "19", "157", "184", "225"],
    ["maximal exertion", "20", "164", "193", "235"],
]
RPE_CITATION = "*Borg G. Borg's Perceived Exertion and Pain Scales. Human Kinetics. 1998."

PDC_HEADING = "Physical Demand Characteristics of Work"
PDC_HEADERS = [
    "Physical Demand Level",
    "OCCASIONAL 0-33% of the workday",
    "FREQUENT 34-66% of the workday",
    "CONSTANT 67-100% of the workday",
]
PDC_ROWS = [
    ["Sedentary", "1 - 10 lbs.", "Negligible", "Negligible"],
    ["Light", "11 - 20 lbs.", "1 - 10 lbs.", "Negligible"],
    ["Medium", "21 - 50 lbs.", "11 - 25 lbs.", "1 - 10 lbs."],
    ["Heavy", "51 - 100 lbs.", "26 - 50 lbs.", "11 - 20 lbs."],
    ["Very Heavy", "Over 100 lbs.", "Over 50 lbs.", "Over 20 lbs."],
]

ENERGY_HEADING = "PDC Categories based on Sustainable Energy Level"
ENERGY_HEADERS = ["PDC Category", "Sustainable Energy Level"]
ENERGY_ROWS = [
    ["Sedentary", "< 1.7 Kcal/min"],
    ["Light", "1.7 to 3.2 Kcal/min"],
    ["Medium", "3.3 to 5.7 Kcal/min"],
    ["Heavy", "5.8 to 8.2 Kcal/min"],
    ["Very Heavy", "8.3 or more Kcal/min"],
]

DESCRIPTORS_HEADING = "General Patterns of Activity Descriptors"
ACTIVITY_DESCRIPTORS = [
    ("(S) Sedentary Work",
     "Exerting up to 10 lb of force occasionally and/or a negligible amount of force "
     "frequently to lift, carry, push, pull, or otherwise move objects, including the "
     "human body. Sedentary work involves sitting most of the time but may involve "
     "walking or standing for brief periods of time. Jobs are sedentary if walking and "
     "standing are required only occasionally and all other sedentary criteria are met."),
    ("(L) Light Work",
     "Exerting up to 20 lb of force occasionally, and/or up to 10 lb of force frequently "
     "and/or a negligible amount of force constantly to move objects. Physical demand "
     "requirements are in excess of those for sedentary work. Even though the weight "
     "lifted may be only negligible, a job should be rated light work: (1) when it "
     "requires walking or standing to a significant degree; or (2) when it requires "
     "sitting most of the time but entails pushing and/or pulling of arm or leg "
     "controls; and/or (3) when the job requires working at a production rate pace "
     "entailing the constant pushing and/or pulling of materials even though the "
     "weight of those materials is negligible."),
    ("(M) Medium Work",
     "Exerting 20 to 50 lb of force occasionally, and/or 10 to 25 lb of force "
     "frequently, and/or greater than negligible up to 10 lb of force constantly to "
     "move objects. Physical demand requirements are in excess of those for light work."),
    ("(H) Heavy Work",
     "Exerting 50 to 100 lb of force occasionally, and/or 25 to 50 lb of force "
     "frequently, and/or 10 to 20 lb of force constantly to move objects, physical "
     "demand requirements are in excess of those for medium work."),
    ("(VH) Very Heavy Work",
     "Exerting in excess of 100 lb of force occasionally, and/or in excess of 50 lb of "
     "force frequently, and/or in excess of 20 lb of force constantly to move objects. "
     "Physical demand requirements are in excess of those for heavy work."),
]
FREQUENCY_NOTE = (
    '***"Occasionally" indicates that an activity or condition exists up to one third '
    'of the time; "frequently" indicates that an activity or condition exists from one '
    'third to two thirds of the time; "constantly" indicates that an activity or '
    "condition exists two thirds or more of the time."
)

END_POINTS_HEADING = "Dynamic Lift Test End Point Conditions"
END_POINTS_HEADERS = ["CONDITION", "DESCRIPTION"]
END_POINT_ROWS = [
    ["Psychophysical",
     "Voluntary test termination by the claimant based on complaints of fatigue, "
     "excessive discomfort, or inability to complete the required number of movements "
     "during the testing interval (cycle)."],
    ["Physiological",
     "Achievement of an age-determined target heart rate (based on a percent of "
     "claimant's maximal heart rate - normally 85%, or in excess of 75% continuously "
     "for one minute)."],
    ["Safety",
     "Achievement of a predetermined anthropometric safe lifting limit based on the "
     "claimant's adjusted body weight; or intervention by the evaluator based upon an "
     "evaluation of the claimant's signs & symptoms."],
]

# ──────────────────────────────────────────────────────────────────
# APPENDIX TWO: DIGITAL LIBRARY
# ──────────────────────────────────────────────────────────────────

APPENDIX_TWO_HEADING = "Appendix Two: Digital Library"
