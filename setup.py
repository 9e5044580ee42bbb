from setuptools import setup

setup(
    name='decoy-cipher',
    version='1.0',
    description='Keyed, reversible obfuscation of map coordinates and short messages.',
    python_requires='>=3.10',
    py_modules=[
        'app', 'config', 'core_logic', 'decoys', 'limiter',
        'message_cipher', 'models', 'obfuscation', 'router', 'seeding',
    ],
    install_requires=[
        'fastapi>=0.110',
        'pydantic>=2.5',
        'slowapi>=0.1.9',
        'uvicorn>=0.27',
    ],
    extras_require={
        'test': ['pytest>=7.4', 'httpx>=0.27'],
    },
)
