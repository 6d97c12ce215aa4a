from fibcalc.worker.main import run

run()
