"""Query tokenization shared by the booster and related-concept extraction."""

STOP_WORDS = frozenset(
    """
    the a an and or but in on at to for of with by from as is was are were been be have has had
    do does did will would could should may might must can this that these those what which who
    whom whose where when why how all each every both few more most other some such no nor not
    only own same so than too very just about into through during before after above below up
    down out off over under again further then once
    """.split()
)


def is_stop_word(word: str) -> bool:
    return word.lower() in STOP_WORDS


def meaningful_words(text: str, min_length: int = 3) -> list[str]:
    """Lowercased whitespace tokens of at least `min_length` chars that are not stop words."""
    return [w for w in text.lower().split() if len(w) >= min_length and w not in STOP_WORDS]
