from glob import glob
from setuptools import setup


setup(
    name='rpnint',
    version='0.1.0',
    description='Numerical integration of RPN functions',
    install_requires=[
        'regex',
        'prompt_toolkit',
        'numpy',
    ],
    packages=['rpnint'],
    package_dir={'': 'src'},
    include_package_data=True,
    zip_safe=False,
    python_requires='>=3.8',
    classifiers=[
        "Programming Language :: Python :: 3",
    ],
    extras_require={
        'test': [
            'pytest',
            'pytest-cov',
            'coverage',
            'flake8',
        ],
    },
    scripts=glob('bin/*'),
    license='ISC',
)
