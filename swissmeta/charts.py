"""Charts for the archive and Deck Lab reports, written to image files."""

import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt

from swissmeta.aggregate import getMetaSlices
from swissmeta.reports import deckLabel

OTHERS_COLOR = '#9aa3b2'

def metaPie(decks, filename, catalog=None, top=8, title='Meta share'):
    """Pie of meta share: the top decks plus one slice for the rest.
    decks: DeckAgg or DeckTournamentStats objects ordered by meta share."""
    slices = getMetaSlices(decks, top)
    labels = []
    colors = []
    for s in slices:
        if s.did is None:
            labels.append(s.name)
            colors.append(OTHERS_COLOR)
        else:
            labels.append(deckLabel(catalog, s.did, s.name))
            colors.append(catalog.getColor(s.did, s.name) if catalog else None)
    fig, ax = plt.subplots(figsize=(7, 7))
    if slices:
        # Fall back to the default color cycle unless every slice has one.
        kwargs = { 'colors': colors } if all(colors) else {}
        ax.pie([ s.share for s in slices ], labels=labels, autopct='%1.1f%%',
                startangle=90, counterclock=False, **kwargs)
    ax.set_title(title)
    ax.axis('equal')
    fig.savefig(filename, bbox_inches='tight')
    plt.close(fig)
    return slices

def winRateBar(decks, filename, catalog=None, limit=10, title='Win rate'):
    """Bar chart of win rates (percent) with the sample size per bar."""
    decks = decks[:limit]
    names = [ deckLabel(catalog, d.did, d.deckName) for d in decks ]
    values = [ round(d.winRate * 100) for d in decks ]
    fig, ax = plt.subplots(figsize=(10, 5))
    bars = ax.bar(range(len(decks)), values)
    for bar, d in zip(bars, decks):
        ax.annotate('N={0}'.format(d.matches), (bar.get_x() + bar.get_width() / 2,
            bar.get_height()), ha='center', va='bottom', fontsize=8)
    ax.set_xticks(range(len(decks)))
    ax.set_xticklabels(names, rotation=18, ha='right')
    ax.set_ylim(0, 100)
    ax.set_ylabel('Win %')
    ax.set_title(title)
    ax.grid(axis='y', alpha=0.3)
    fig.savefig(filename, bbox_inches='tight')
    plt.close(fig)
    return values

def trendLine(points, filename, title='Monthly score'):
    """Line chart of a monthly trend (draw-inclusive score, percent)."""
    months = [ p.month for p in points ]
    values = [ p.winRate * 100 for p in points ]
    fig, ax = plt.subplots(figsize=(9, 4))
    ax.plot(months, values, marker='o')
    for month, value, p in zip(months, values, points):
        ax.annotate('N={0}'.format(p.matches), (month, value),
                textcoords='offset points', xytext=(0, 6), ha='center', fontsize=8)
    ax.set_ylim(0, 100)
    ax.set_ylabel('Score %')
    ax.set_title(title)
    ax.grid(alpha=0.3)
    fig.savefig(filename, bbox_inches='tight')
    plt.close(fig)
    return values
