'''
This setup.py exists so that we can easily add sitemapgen to the Python path
and install its dependencies.
'''
from setuptools import setup, find_packages
from pathlib import Path

here = Path(__file__).parent

# Get version
version = {}
with (here / "sitemapgen" / "version.py").open() as f:
    exec(f.read(), version)

setup(
    name='sitemapgen',
    version=version['__version__'],
    description='Localized XML sitemap generator for online stores',
    python_requires=">=3.7",
    keywords='sitemap seo hreflang',
    packages=find_packages(exclude=['docs', 'tests']),
    install_requires=[
        'python-dateutil',
        'w3lib',
        'yarl',
    ],
    extras_require={
        'test': ['pytest'],
    },
    entry_points={
        'console_scripts': ['sitemapgen=sitemapgen.__main__:cli'],
    },
)
