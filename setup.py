"""clhe setup script.

Options:                python setup.py --help
Install by admin/root:  python setup.py install
Install by user:        python setup.py install --user
Install options:        python setup.py install --help
"""

from setuptools import setup
import clhe

with open('README.md', 'r') as f:
    LONG_DESCRIPTION = f.read()

setup(
    name='clhe',
    version=clhe.__version__,
    description='clhe -- Linearly Homomorphic Encryption from Class Groups',
    long_description=LONG_DESCRIPTION,
    long_description_content_type='text/markdown',
    keywords=['crypto', 'cryptography', 'homomorphic encryption', 'class groups',
              'binary quadratic forms', 'imaginary quadratic orders',
              'Castagnos-Laguillaumie', 'CL15'],
    classifiers=[
        'Development Status :: 3 - Alpha',
        'Environment :: Console',
        'Intended Audience :: Developers',
        'Intended Audience :: Education',
        'Intended Audience :: Science/Research',
        'License :: OSI Approved :: MIT License',
        'Operating System :: OS Independent',
        'Programming Language :: Python :: 3 :: Only',
        'Topic :: Security :: Cryptography',
        'Topic :: Scientific/Engineering :: Mathematics',
        'Topic :: Software Development :: Libraries :: Python Modules'
    ],
    license=clhe.__license__,
    packages=['clhe'],
    platforms=['any'],
    install_requires=['gmpy2'],
    python_requires='>=3.9'
)
