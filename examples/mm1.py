import simqueue

# a run with the same seed is reproducible
mean_queue, expected_mean_queue, mean_wait, expected_mean_wait = \
    simqueue.mm1_queue_demo(1.0, 2.0, 10000, seed=13579)

print("mean queue length: %g (expected %g)" % (mean_queue, expected_mean_queue))
print("mean wait time: %g (expected %g)" % (mean_wait, expected_mean_wait))
