# capitra/languages.py
# Catálogo de idiomas soportados: código → nombre que viaja en los prompts.
LANGUAGES: dict[str, str] = {
    "en":    "Inglês",
    "pt-BR": "Português (Brasil)",
    "es":    "Espanhol",
    "fr":    "Francês",
    "de":    "Alemão",
    "it":    "Italiano",
    "ja":    "Japonês",
    "ko":    "Coreano",
    "ru":    "Russo",
    "zh-CN": "Chinês (Simplificado)",
}

# Único par con voces y reglas afinadas
SPECIALIZED_SOURCE = LANGUAGES["en"]
SPECIALIZED_TARGET = LANGUAGES["pt-BR"]


def resolve_language(value: str) -> str:
    """
    Acepta un código ("pt-br") o un nombre ("português (brasil)")
    sin distinguir mayúsculas, y devuelve el nombre canónico.
    """
    wanted = value.strip().lower()
    for code, name in LANGUAGES.items():
        if wanted in (code.lower(), name.lower()):
            return name
    raise ValueError(
        f"Idioma não suportado: '{value}'. "
        f"Disponíveis: {', '.join(LANGUAGES)}"
    )


def language_code(name: str) -> str:
    for code, candidate in LANGUAGES.items():
        if candidate == name:
            return code
    raise ValueError(f"Idioma não suportado: '{name}'")


def is_specialized_pair(source_language: str, target_language: str) -> bool:
    return source_language == SPECIALIZED_SOURCE and target_language == SPECIALIZED_TARGET
