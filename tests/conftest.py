from htm_date.plotting import set_matplotlib_headless

set_matplotlib_headless()
