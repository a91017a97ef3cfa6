"""Prompt text, response schemas and the canonical instructions text."""

from bff.models import Language

MAX_WORDS = 10

SUPPORTED_LANGUAGES: list[Language] = [
    Language(code="en-US", name="English", voice="Zephyr"),
    Language(code="es-ES", name="Spanish", voice="Puck"),
    Language(code="fr-FR", name="French", voice="Charon"),
    Language(code="de-DE", name="German", voice="Fenrir"),
    Language(code="it-IT", name="Italian", voice="Kore"),
]

# Schemas use the provider's OpenAPI-subset vocabulary.
WORDS_SCHEMA = {
    "type": "OBJECT",
    "properties": {"words": {"type": "ARRAY", "items": {"type": "STRING"}}},
    "required": ["words"],
}

ASSESSMENT_SCHEMA = {
    "type": "OBJECT",
    "properties": {
        "score": {"type": "INTEGER"},
        "feedback": {"type": "STRING"},
    },
    "required": ["score", "feedback"],
}

BASE_INSTRUCTIONS = """
1.  **Enter a Topic:** Type any subject you want to practice, like "fruits," "traveling," or "business."
2.  **Select a Language:** Choose the language you are learning from the dropdown menu.
3.  **Start Practice:** Click the "Start Practice" button. The AI will generate 10 words related to your topic.
4.  **Listen:** For each word, click the play button (▶️) to hear how a native speaker pronounces it.
5.  **Record:** Click the microphone button (🎤) and pronounce the word clearly.
6.  **Stop & Assess:** Click the stop button (⏹️) when you're done. The AI will analyze your pronunciation.
7.  **Get Feedback:** You will see a score from 1 to 100 and receive tips on how to improve.
8.  **Practice Again:** Try recording again to improve your score, or move to the next word.
"""


def words_prompt(topic: str, language: str) -> str:
    return (
        f"Generate a list of {MAX_WORDS} common, single words related to the topic "
        f"'{topic}' in {language}. The words should be suitable for a language learner."
    )


def speech_prompt(text: str) -> str:
    return f"Pronounce the word: {text}"


def assessment_prompt(word: str, language: str) -> str:
    return (
        f"You are a language pronunciation expert. The target word is '{word}' in {language}. "
        "A non-native speaker has pronounced it. The provided audio is their attempt. "
        "Analyze the pronunciation in the audio. Provide a score from 1 to 100 on how close "
        "it is to a native speaker's pronunciation, where 100 is perfect. Also, provide a "
        "short, constructive, and encouraging feedback on what can be improved."
    )


def translation_prompt(language_name: str) -> str:
    return (
        f"Translate the following instructions for a web application into {language_name}. "
        "Keep the formatting (like the bolded parts and numbered list) the same. "
        "Do not add any extra text, preamble, or explanation. "
        f"Just provide the translated text.\n\n---\n\n{BASE_INSTRUCTIONS}"
    )
