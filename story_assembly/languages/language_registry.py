from story_assembly.errors import UnsupportedLanguageError


class LanguageRegistry:
    _languages = {}

    # Register a language profile class with the registry
    @classmethod
    def register_language(cls, name):
        def decorator(profile_class):
            profile_class.name = name
            cls._languages[name] = profile_class
            return profile_class
        return decorator

    @classmethod
    def get_language(cls, name):
        """
        Instantiate the profile registered under `name`.

        Raises:
            UnsupportedLanguageError: if no profile is registered under that name.
        """
        profile_class = cls._languages.get(name.lower() if isinstance(name, str) else name)
        if profile_class is None:
            raise UnsupportedLanguageError(
                f"Unsupported language {name!r}, expected one of: {', '.join(sorted(cls._languages))}"
            )
        return profile_class()

    @classmethod
    def available_languages(cls):
        return sorted(cls._languages)
