"""Qt views, dialogs and the timer-driven controllers behind them."""
