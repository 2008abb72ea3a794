"""Personal trading journal with profit, drawdown, and risk analytics."""
