from setuptools import setup, find_namespace_packages

setup(
    name='sql2dsql',
    version='0.1.0',
    description='Send SQL to a DSQL translation backend and lay out the reply.',
    packages=find_namespace_packages(include=['sql2dsql', 'sql2dsql.*']),
    include_package_data=True,
    package_data={
        'sql2dsql.web': ['templates/*.html', 'templates/*/*.html', 'static/*'],
    },
    install_requires=[
        'click',
        'fastapi',
        'jinja2',
        'platformdirs',
        'pydantic',
        'python-multipart',
        'requests',
        'uvicorn',
    ],
    extras_require={
        'test': [
            'pytest',
            'httpx',
        ],
    },
    entry_points={
        "console_scripts": [
            # 'sql2dsql' command will call the main() group in sql2dsql/cli.py
            "sql2dsql = sql2dsql.cli:main",
        ],
    },
    classifiers=[
        'Operating System :: OS Independent',
    ],
    python_requires='>=3.10',
)
