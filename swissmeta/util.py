"""Utility functions"""

from operator import attrgetter

drawMult = 0.5  #How much a draw contributes to the draw-inclusive score
drawCount = 1  #How much a draw contributes to total matches

WIN = 'W'
LOSS = 'L'
DRAW = 'D'

# Match statistics

def record(outcomes):
    """Get the (win, loss, draw) record from a list of outcomes."""
    win = sum([ 1 for o in outcomes if o == WIN ])
    loss = sum([ 1 for o in outcomes if o == LOSS ])
    draw = sum([ 1 for o in outcomes if o == DRAW ])
    return (win, loss, draw)

def winRate(win, loss, draw):
    """Draw-exclusive win rate: wins over matches played, or 0 when no
    matches were played. Draws count as matches but never as wins."""
    total = win + loss + (draw*drawCount)
    if total > 0:
        return win / total
    else:
        return 0

def scoreRate(win, loss, draw):
    """Draw-inclusive win rate, (wins + draws/2) over matches played, or 0
    when no matches were played."""
    total = win + loss + (draw*drawCount)
    if total > 0:
        return (win + (draw*drawMult)) / total
    else:
        return 0

def ratio(count, total):
    if total > 0:
        return count / total
    return 0

# Dates

def getMonth(date):
    """Month bucket (YYYY-MM) of a YYYY-MM-DD date string."""
    return date[:7]

def groupByMonth(tournaments):
    """Seperate a list of Tournaments by month. Returns a list of
    (month, tournaments) pairs in chronological order; months with no
    tournaments are not included."""
    groups = {}
    for t in sorted(tournaments, key=attrgetter("date")):
        groups.setdefault(getMonth(t.date), []).append(t)
    return sorted(groups.items())
