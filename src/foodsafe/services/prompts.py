"""Prompt text for the assessment and extraction model calls."""

import json

from foodsafe.domain.assessments import AssessmentRequest, Verdict
from foodsafe.domain.labels import LabelExtraction
from foodsafe.domain.profiles import HealthProfile

EXTRACTION_PROMPT = (
    "You read photographs of packaged food labels. "
    "Extract the product name, the full ingredient list as separate items, "
    "and the raw text of the label exactly as printed. "
    "Read the nutrition facts per serving: calories, total fat in grams, "
    "total sugars in grams and sodium in milligrams, plus the serving size "
    "in grams when it is printed. "
    "Use 0 for a nutrient that is not listed and null for a missing serving "
    "size. Convert sodium given in grams to milligrams."
)

_INTRO = (
    "You are a food safety assistant. You assess whether a packaged food is "
    "safe for a specific person, based on their health profile and the "
    "information printed on the food label."
)

_TASK = """Write a response with three parts:

1. product_summary: one or two sentences describing what the product is.
2. nutritional_analysis: how the calories, fat, sugar and sodium relate to \
the person's weight goal. Weight-goal analysis belongs here and only here.
3. assessment and explanation: the safety verdict and the reason for it.

The assessment must be exactly one of:
- "Safe to Eat": no risk identified for the person's health conditions \
or allergies.
- "Consume in Moderation": a risk exists for the person's health \
conditions; limit consumption.
- "Not Safe": a significant risk or an allergen the person must avoid.

The safety verdict depends only on the person's health conditions and \
allergies. Never change the verdict because the food does or does not fit \
the weight goal. A person with no health conditions and no allergies gets \
"Safe to Eat" unless the label shows a hazard for everyone.
The explanation must name the specific ingredients or nutrition values \
that drove the verdict."""

_EXAMPLES: list[tuple[str, dict[str, object]]] = [
    (
        """Health Conditions: diabetes
Detailed Health Conditions: not provided
Weight Goal: lose weight
Food Label Data: Product: Fruit Snack Bar. Ingredients: High Fructose \
Corn Syrup, Enriched Flour, Sugar
Nutrition Information: calories 200 kcal, fat 5 g, sugar 20 g, \
sodium 100 mg""",
        {
            "product_summary": "A sweetened fruit snack bar.",
            "nutritional_analysis": (
                "At 200 kcal a bar it is calorie dense for a weight loss "
                "plan; portion it carefully."
            ),
            "assessment": Verdict.MODERATION.value,
            "explanation": (
                "High fructose corn syrup and sugar give 20 g of sugar per "
                "serving, which can spike blood glucose for people with "
                "diabetes."
            ),
        },
    ),
    (
        """Health Conditions: allergies
Detailed Health Conditions: allergic to milk
Weight Goal: maintain weight
Food Label Data: Product: Pancake Mix. Ingredients: Milk, Eggs, Wheat
Nutrition Information: calories 150 kcal, fat 3 g, sugar 10 g, \
sodium 50 mg""",
        {
            "product_summary": "A pancake mix made with dairy and eggs.",
            "nutritional_analysis": (
                "Moderate calories and fat; fits a maintenance diet."
            ),
            "assessment": Verdict.NOT_SAFE.value,
            "explanation": (
                "The product contains milk, which the person is allergic to."
            ),
        },
    ),
    (
        """Health Conditions: none reported
Detailed Health Conditions: not provided
Weight Goal: gain weight
Food Label Data: Product: Chicken Rice Bowl. Ingredients: Chicken, Rice, \
Vegetables
Nutrition Information: calories 300 kcal, fat 10 g, sugar 5 g, \
sodium 150 mg""",
        {
            "product_summary": "A ready meal of chicken, rice and vegetables.",
            "nutritional_analysis": (
                "A balanced 300 kcal meal with protein that supports "
                "healthy weight gain."
            ),
            "assessment": Verdict.SAFE.value,
            "explanation": (
                "No health conditions or allergies are declared and the "
                "label is low in sugar and sodium."
            ),
        },
    ),
]


def render_assessment_prompt(request: AssessmentRequest) -> str:
    """Render the instruction text for a validated assessment request."""
    sections = [
        _INTRO,
        "User Profile:\n" + _render_profile(request.profile),
        "Food Scan Data:\n" + _render_label(request.label),
        _TASK,
        _render_examples(),
        "Now assess the food for the user profile above.",
    ]
    return "\n\n".join(sections) + "\n"


def _render_profile(profile: HealthProfile) -> str:
    conditions = ", ".join(condition.value for condition in profile.conditions)
    lines = [
        f"Health Conditions: {conditions or 'none reported'}",
        "Detailed Health Conditions: "
        f"{profile.detailed_health_conditions or 'not provided'}",
        f"Weight Goal: {profile.weight_goal.value}",
    ]
    if profile.gender:
        lines.append(f"Gender: {profile.gender}")
    if profile.current_weight_kg is not None:
        lines.append(f"Current Weight: {_amount(profile.current_weight_kg)} kg")
    return "\n".join(lines)


def _render_label(label: LabelExtraction) -> str:
    label_data = label.label_text or (
        f"Product: {label.product_name}. Ingredients: {label.ingredients_text}"
    )
    lines = [
        f"Product Name: {label.product_name}",
        f"Food Label Data: {label_data}",
        f"Ingredients: {label.ingredients_text or 'not listed'}",
    ]
    if label.serving_size_g is not None:
        lines.append(f"Serving Size: {_amount(label.serving_size_g)} g")
    lines.append(
        "Nutrition Information: "
        f"calories {_amount(label.calories)} kcal, "
        f"fat {_amount(label.fat_g)} g, "
        f"sugar {_amount(label.sugar_g)} g, "
        f"sodium {_amount(label.sodium_mg)} mg"
    )
    return "\n".join(lines)


def _render_examples() -> str:
    blocks = []
    for index, (example_input, example_output) in enumerate(_EXAMPLES, start=1):
        blocks.append(
            f"Example {index}:\n{example_input}\nOutput:\n"
            f"{json.dumps(example_output, ensure_ascii=False)}"
        )
    return "\n\n".join(blocks)


def _amount(value: float) -> str:
    if value.is_integer():
        return str(int(value))
    return repr(value)
