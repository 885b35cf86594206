from bujo_planner.logger import register_levels

register_levels()
