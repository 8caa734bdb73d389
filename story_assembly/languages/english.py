from story_assembly.languages.language_profile import LanguageProfile
from story_assembly.languages.language_registry import LanguageRegistry


@LanguageRegistry.register_language("english")
class EnglishProfile(LanguageProfile):
    preamble_patterns = [
        r"here(?:['’]s| is| comes) [^.!?:\n]*?\b(?:story|tale|bedtime)[^.!?:\n]*[.!?:]+",
        r"(?:sure|certainly|of course|absolutely)(?:,? (?:here|i)\b[^.!?:\n]*)?[.!:]+",
        r"(?:okay|ok),? here\b[^.!?:\n]*[.!?:]+",
        r"i(?:['’]d| would) (?:be happy|love) to [^.!?:\n]*[.!?:]+",
        r"let me tell you [^.!?:\n]*?\b(?:story|tale)[^.!?:\n]*[.!?:]+",
        r"i hope you (?:enjoy|like|love) [^.!?:\n]*[.!?:]+",
    ]
    fallback_title_prefix = "Story"
    closing_line = "The End."
    illustration_alt_text = "Story illustration"

    language_instruction = "CRITICAL REQUIREMENT: Write the ENTIRE story in ENGLISH ONLY. Do not use any other language."
    length_words = {
        "short": "300-400 words",
        "medium": "600-700 words",
        "long": "900-1000 words",
    }
    age_instructions = {
        "toddler": "Use simple words and short sentences suitable for ages 1-3",
        "preschooler": "Use clear language and simple concepts suitable for ages 3-5",
        "preschool": "Use clear language and simple concepts suitable for ages 3-5",
        "elementary": "Use engaging language and more complex concepts suitable for ages 6-10",
    }
    default_age_instruction = "Use clear language suitable for young children"
    default_main_character = "a child"
    user_message = "Please create a story based on the parameters provided."

    prompt_template = (
        "{language_instruction}\n"
        "\n"
        "You are an exceptional children's bedtime story writer known for your creativity and originality. "
        "Create a captivating, age-appropriate story that stands out from typical children's tales.\n"
        "\n"
        "STORY REQUIREMENTS:\n"
        "  - Main character(s): {characters} - The first character on the list, '{main_character}', MUST be "
        "central to the story with distinct personality traits, desires, and challenges.\n"
        "  - Setting: {setting} - Create a vivid, immersive setting with sensory details.\n"
        "  - Theme/Message: {moral_message} - Weave this theme or message throughout the story in unexpected ways.\n"
        "  - Age group: {age_instructions} - Use vocabulary and concepts appropriate for this age.\n"
        "  - Length: {length_words}\n"
        "\n"
        "CREATIVE ELEMENTS (REQUIRED):\n"
        "  - Include at least one surprising plot twist that changes the direction of the story\n"
        "  - Create a unique challenge or obstacle that requires creative problem-solving\n"
        "  - Include vivid imagery and metaphors that children can understand\n"
        "  - Incorporate an unexpected element or magical aspect that delights and surprises\n"
        "{illustrations}"
        "\n"
        "FORMAT REQUIREMENTS (VERY IMPORTANT):\n"
        "  1. Start with the title on its own line, surrounded by ** (e.g., **The Magic Forest**)\n"
        "  2. Add a blank line after the title\n"
        "  3. Separate each paragraph with a blank line\n"
        "  4. For dialog, use quotation marks and proper attribution (e.g., \"Hello,\" said Sam.)\n"
        "  5. End the story with \"{closing_line}\" on its own line\n"
        "\n"
        "Do not include any disclaimers, notes, or explanations before or after the story. "
        "Just provide the story itself, starting with the title and ending with \"{closing_line}\""
    )
    illustration_instructions = (
        "\n"
        "ILLUSTRATIONS:\n"
        "  1. At 2-3 key moments in your story, generate beautiful, colorful illustrations\n"
        "  2. Place each illustration at the most impactful point, between paragraphs\n"
        "  3. Mark image locations with [Image: brief description]\n"
    )
