import simqueue

def observe():
    # print each customer as soon as it's served
    while q.num_served() > 0:
        c = q.pop_served()
        print("%g: customer arrived at %g (queue=%d) waited %g, served %g" %
              (sim.now, c.arrival_time, c.queue_on_arrival,
               c.wait_time(), c.service_time()))
    return simqueue.STEP.CONTINUE

sim = simqueue.simulator('ssq', seed=12345)
q = simqueue.MM1Queue(sim, 1/1.2, 1/0.8)
q.start()
sim.run(observe, until=10)
print("%g: %d arrivals, %d in system" % (sim.now, q.num_arrivals(), q.num_in_system()))
