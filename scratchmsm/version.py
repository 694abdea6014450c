# THIS FILE IS GENERATED FROM SCRATCHMSM SETUP.PY
short_version = '0.1.0'
version = '0.1.0'
full_version = '0.1.0'
release = True
