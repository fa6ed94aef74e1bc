"""Blackjack-specific constants."""

# Highest total that does not bust
BLACKJACK = 21

# Dealer draws below this total and stands on it, soft or hard
DEALER_STAND_THRESHOLD = 17

# Difference between an ace counted as 11 and as 1
ACE_DEMOTION = 10
