from setuptools import setup, find_packages

setup(
    name="pickleball-league",
    version="0.1",
    packages=find_packages(include=["pickleball_league", "pickleball_league.*"]),
    py_modules=["initialize_sheets"],
    install_requires=[
        "streamlit",
        "pandas",
        "google-api-python-client",
        "google-auth",
        "google-auth-httplib2",
        "google-auth-oauthlib",
        "extra_streamlit_components",
        "qrcode[pil]",
    ],
    extras_require={
        "test": ["pytest"],
    },
)
