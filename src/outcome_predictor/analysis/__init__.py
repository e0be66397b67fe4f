"""
Factor analyzers feeding the enhanced predictor.

Each analyzer turns game history and/or an optional collaborator report into
a bounded adjustment (positive favors the home team) plus an explanation
fragment for the prediction's reasoning text.

Usage example
-------------
    from outcome_predictor.analysis.recent_form import analyze_recent_form

    form = analyze_recent_form(team, completed_games)
    form.momentum()
"""

# Import concrete modules where you need them rather than relying on this
# package to re-export everything.
