"""Building blocks for an agent-based world simulation: voxel grid, agents,
events, economy, markets, politics, perception and goal-oriented planning."""

__version__ = "0.1.0"