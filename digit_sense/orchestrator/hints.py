"""
Clues unlocked by wrong guesses.

Each clue depends only on the target digit, so once a clue is visible its
wording never changes while the round goes on.
"""

PRIMES = {2, 3, 5, 7}


def _parity_clue(target: int) -> str:
    return f"Clue 1: The number is {'even' if target % 2 == 0 else 'odd'}."


def _magnitude_clue(target: int) -> str:
    return f"Clue 2: The number is {'greater than 4' if target > 4 else 'less than or equal to 4'}."


def _primality_clue(target: int) -> str:
    # 0 and 1 stay in their own bucket
    if target in (0, 1):
        kind = "neither prime nor composite"
    elif target in PRIMES:
        kind = "a prime number"
    else:
        kind = "a composite number"
    return f"Clue 3: The number is {kind}."


# Unlock order: clue N appears after N wrong guesses
CLUES = (_parity_clue, _magnitude_clue, _primality_clue)


def compute_hints(target_digit: int, wrong_guess_count: int, max_hints: int = len(CLUES)) -> list[str]:
    unlocked = max(0, min(wrong_guess_count, max_hints, len(CLUES)))
    return [clue(target_digit) for clue in CLUES[:unlocked]]
