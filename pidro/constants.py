"""Game constants for Finnish Pidro."""

# Table
NUM_SEATS = 4

# Dealing
INITIAL_HAND_SIZE = 9
DEAL_BATCH_SIZE = 3
FINAL_HAND_SIZE = 6

# Bidding
MIN_BID = 6
MAX_BID = 14

# Scoring
WINNING_SCORE = 62

# Ranks
ACE = 14
KING = 13
QUEEN = 12
JACK = 11
TEN = 10
FIVE = 5
TWO = 2

# Trump ordering slots for the two fives (between 6 and 4)
RIGHT_FIVE_RANK = 5.0
WRONG_FIVE_RANK = 4.5
NON_TRUMP_RANK = -1000.0
