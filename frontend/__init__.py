"""
Cafe Directory terminal client.

  csrf.py   — CsrfFetch, the single HTTP wrapper (httpx) every call goes through
  store/    — Store container, reducers and thunk-style action creators
  views/    — rich renderables for navigation, cafes, reviews and forms
  cli.py    — `cafe-directory` argparse entry point
"""
