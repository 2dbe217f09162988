# Fixed reply texts for the rule-based assistant.
# Goal: preliminary guidance only, never a diagnosis. Every advisory reply ends by
# pointing the user at a qualified professional.
# Wording should be reviewed by clinicians before any real-world use.

GREETING_TEXT = (
    "Hello! I'm your AI Medical Assistant. I'm here to help you understand your symptoms. "
    "Please describe what symptoms you're experiencing, and I'll provide some preliminary guidance. "
    "Remember, this is not a substitute for professional medical advice."
)

EMERGENCY_TEXT = (
    "⚠️ These symptoms sound serious. Please seek immediate medical attention by calling "
    "emergency services or going to the nearest emergency room. Do not delay."
)

CLARIFY_TEXT = (
    "I'd like to help you better. Could you please describe your symptoms in more detail? "
    "For example, are you experiencing fever, cough, headache, nausea, or any other specific symptoms?"
)

DISCLAIMER_TEXT = (
    "⚕️ Please note: This is a preliminary assessment. For accurate diagnosis and treatment, "
    "please consult with a qualified healthcare professional."
)

# {symptoms} is the comma-joined detected list, {advice} the matched diagnosis advice.
DIAGNOSIS_TEMPLATE = "Based on your symptoms ({symptoms}), {advice}\n\n" + DISCLAIMER_TEXT

GENERIC_TEMPLATE = (
    "I understand you're experiencing: {symptoms}. While I can provide general information, "
    "these symptoms should be evaluated by a healthcare professional for an accurate diagnosis "
    "and appropriate treatment. If your symptoms are severe or worsening, please seek medical "
    "attention promptly."
)

UNSUPPORTED_VOICE_NOTICE = (
    "Speech recognition is not supported in your browser. Please try Chrome or Edge."
)

# Languages offered by the UI selector. Display only: replies are always English.
LANGUAGES = {
    "en": "English",
    "es": "Español",
    "fr": "Français",
    "de": "Deutsch",
    "zh": "中文",
}
