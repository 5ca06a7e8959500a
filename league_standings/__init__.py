"""
League standings: team records, rankings, playoff badges and the draft board.
"""
