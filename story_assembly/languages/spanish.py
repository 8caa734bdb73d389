from story_assembly.languages.language_profile import LanguageProfile
from story_assembly.languages.language_registry import LanguageRegistry


@LanguageRegistry.register_language("spanish")
class SpanishProfile(LanguageProfile):
    preamble_patterns = [
        r"aquí (?:tienes|está|te dejo|va) [^.!?:\n]*?\b(?:cuento|historia|relato)[^.!?:\n]*[.!?:]+",
        r"¡?(?:claro(?: que sí)?|por supuesto|desde luego|con gusto)(?:,? (?:aquí|te)\b[^.!?:\n]*)?[.!:]+",
        r"¡?(?:me encantaría|con mucho gusto) [^.!?:\n]*[.!?:]+",
        r"déjame contarte [^.!?:\n]*[.!?:]+",
        r"espero que (?:disfrutes|te guste) [^.!?:\n]*[.!?:]+",
    ]
    fallback_title_prefix = "Cuento"
    closing_line = "Fin."
    illustration_alt_text = "Ilustración del cuento"

    language_instruction = (
        "REQUISITO CRÍTICO: Escribe TODA la historia en ESPAÑOL SOLAMENTE. No uses ningún otro idioma. "
        "Esto es absolutamente obligatorio."
    )
    length_words = {
        "short": "300-400 palabras",
        "medium": "600-700 palabras",
        "long": "900-1000 palabras",
    }
    age_instructions = {
        "toddler": "Usa palabras sencillas y oraciones cortas adecuadas para niños de 1 a 3 años",
        "preschooler": "Usa un lenguaje claro y conceptos sencillos adecuados para niños de 3 a 5 años",
        "preschool": "Usa un lenguaje claro y conceptos sencillos adecuados para niños de 3 a 5 años",
        "elementary": "Usa un lenguaje atractivo y conceptos más complejos adecuados para niños de 6 a 10 años",
    }
    default_age_instruction = "Usa un lenguaje claro adecuado para niños pequeños"
    default_main_character = "un niño"
    user_message = "Por favor crea una historia basada en los parámetros proporcionados."

    prompt_template = (
        "{language_instruction}\n"
        "\n"
        "Eres un escritor excepcional de cuentos infantiles para la hora de dormir, conocido por tu creatividad "
        "y originalidad. Crea una historia cautivadora y apropiada para la edad que se destaque de los cuentos "
        "infantiles típicos.\n"
        "\n"
        "REQUISITOS DE LA HISTORIA:\n"
        "  - Personaje(s) principal(es): {characters} - El primer personaje de la lista, '{main_character}', "
        "DEBE ser central en la historia con rasgos de personalidad distintivos, deseos y desafíos.\n"
        "  - Escenario: {setting} - Crea un escenario vívido e inmersivo con detalles sensoriales.\n"
        "  - Tema/Mensaje: {moral_message} - Entreteje este tema o mensaje a lo largo de la historia de maneras "
        "inesperadas.\n"
        "  - Grupo de edad: {age_instructions} - Usa vocabulario y conceptos apropiados para esta edad.\n"
        "  - Longitud: {length_words}\n"
        "\n"
        "ELEMENTOS CREATIVOS (REQUERIDOS):\n"
        "  - Incluye al menos un giro argumental sorprendente que cambie la dirección de la historia\n"
        "  - Crea un desafío u obstáculo único que requiera resolución creativa de problemas\n"
        "  - Incluye imágenes vívidas y metáforas que los niños puedan entender\n"
        "  - Incorpora un elemento inesperado o aspecto mágico que deleite y sorprenda\n"
        "{illustrations}"
        "\n"
        "REQUISITOS DE FORMATO (MUY IMPORTANTE):\n"
        "  1. Comienza con el título en su propia línea, rodeado por ** (ej., **El Bosque Mágico**)\n"
        "  2. Agrega una línea en blanco después del título\n"
        "  3. Separa cada párrafo con una línea en blanco\n"
        "  4. Para diálogos, usa comillas y atribución apropiada (ej., \"Hola,\" dijo Sam.)\n"
        "  5. Termina la historia con \"{closing_line}\" en su propia línea\n"
        "\n"
        "No incluyas ninguna advertencia, nota o explicación antes o después de la historia. "
        "Solo proporciona la historia en sí, comenzando con el título y terminando con \"{closing_line}\""
    )
    illustration_instructions = (
        "\n"
        "ILUSTRACIONES:\n"
        "  1. En 2-3 momentos clave de la historia, genera ilustraciones hermosas y coloridas\n"
        "  2. Coloca cada ilustración en el punto de mayor impacto, entre párrafos\n"
        "  3. Marca la ubicación de cada imagen con [Image: breve descripción]\n"
    )
