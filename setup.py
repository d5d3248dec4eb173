from setuptools import setup

install_requires = ['networkx', 'numpy']

setup(name='brzozowski',
      version='0.0.0',
      description='Deterministic finite automata from Brzozowski derivatives',
      license='Apache 2.0',
      packages=['brzozowski', 'brzozowski.tests'],
      install_requires=install_requires,
      extras_require={'test': ['pytest', 'hypothesis']},
      python_requires='>=3.6',
      zip_safe=False)
