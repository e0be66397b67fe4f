# Import loaders explicitly, e.g.
#
#   from outcome_predictor.data.loaders.schedules import ScheduleLoader
#
# so that importing the data package never requires nflreadpy.
