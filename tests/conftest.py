import matplotlib

# No display in test runs
matplotlib.use("Agg")
