import math

WORDS_PER_MINUTE = 200


def calculate_reading_time(text: str) -> int:
    words = text.split()
    return math.ceil(len(words) / WORDS_PER_MINUTE) or 1
