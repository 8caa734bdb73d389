from setuptools import setup, find_packages

# Read the contents of requirements.txt to use in install_requires
with open('requirements.txt') as f:
    requirements = f.read().splitlines()

setup(
    name='story_assembly',
    version='1.0',
    description='Cleanup, title extraction and illustration placement for AI generated bedtime stories',
    packages=find_packages(exclude=['tests', 'tests.*']),
    classifiers=[
        'Programming Language :: Python :: 3',
        'License :: OSI Approved :: MIT License',
        'Operating System :: OS Independent',
    ],
    python_requires='>=3.8',
    install_requires=requirements,
    extras_require={
        'test': ['pytest'],
    },
)
