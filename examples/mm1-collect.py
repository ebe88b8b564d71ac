import simqueue

dc = simqueue.DataCollector(
    inter_arrivals='dataseries',
    queue_times='dataseries',
    system_times='dataseries',
    in_systems='timeseries(all)',
)
r = simqueue.run_mm1(0.8, 1.0, 5000, seed=24680, collect=dc)
r.report()
dc.report(r.end_time)
