"""
Packaging script for PyPI.
"""
import setuptools

setuptools.setup(
	name='slogo-lang',
	version='0.1.0',
	packages=['slogo'],
	package_data={
		'slogo': ["languages/*.properties"],
	},
	entry_points={
		'console_scripts': ["slogo = slogo.cmdline:main"],
	},
	license='MIT',
	description='An interpreter for SLogo, a small Logo-style turtle-graphics language',
	long_description=open('README.md').read(),
	long_description_content_type="text/markdown",
	classifiers=[
		"Programming Language :: Python :: 3.12",
		"License :: OSI Approved :: MIT License",
		"Operating System :: OS Independent",
		"Development Status :: 3 - Alpha",
		"Intended Audience :: Education",
		"Topic :: Software Development :: Interpreters",
		"Topic :: Education",
		"Environment :: Console",
    ],
	python_requires='>=3.11',
	install_requires=[
		"booze-tools>=0.6.2.1",
		"pygame>=2.4.0",
	]
)
