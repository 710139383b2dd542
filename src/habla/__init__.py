"""habla: spaced-repetition phrase trainer with fuzzy answer checking."""
